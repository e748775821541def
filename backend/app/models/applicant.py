"""
Applicant model
"""
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, UniqueConstraint
from sqlalchemy.sql import func
from app.core.database import Base


class Applicant(Base):
    """Applicant of either program; variant columns stay null for the other program"""

    __tablename__ = "applicants"
    __table_args__ = (
        UniqueConstraint("program", "code", name="uq_applicants_program_code"),
    )

    id = Column(String(32), primary_key=True)
    code = Column(String(20), nullable=False, index=True)
    program = Column(String(10), nullable=False, index=True)  # GIP, TUPAD

    # Personal information
    first_name = Column(String(100))
    middle_name = Column(String(100))
    last_name = Column(String(100))
    extension_name = Column(String(20))
    birth_date = Column(Date)
    age = Column(Integer, nullable=False)
    gender = Column(String(10), nullable=False)
    barangay = Column(String(50), index=True)
    residential_address = Column(String(500))
    contact_number = Column(String(20))
    telephone_number = Column(String(20))
    email = Column(String(255))
    civil_status = Column(String(50))
    beneficiary_name = Column(String(200))

    # Workflow
    status = Column(String(20), nullable=False, default="PENDING", index=True)
    interviewed = Column(Boolean, nullable=False, default=False)
    archived = Column(Boolean, nullable=False, default=False, index=True)
    archived_date = Column(Date)
    date_submitted = Column(Date, nullable=False)
    encoder = Column(String(100), nullable=False, default="Administrator")
    version = Column(Integer, nullable=False, default=1)

    # Attachments (opaque encoded content)
    resume_file_name = Column(String(255))
    resume_file_data = Column(Text)
    photo_file_name = Column(String(255))
    photo_file_data = Column(Text)

    # GIP
    place_of_birth = Column(String(200))
    school = Column(String(255))
    primary_school_name = Column(String(255))
    primary_from = Column(Integer)
    primary_to = Column(Integer)
    primary_education = Column(String(100))
    junior_high_school_name = Column(String(255))
    junior_high_from = Column(Integer)
    junior_high_to = Column(Integer)
    junior_high_education = Column(String(100))
    senior_high_school_name = Column(String(255))
    senior_high_from = Column(Integer)
    senior_high_to = Column(Integer)
    senior_high_education = Column(String(100))
    tertiary_school_name = Column(String(255))
    tertiary_from = Column(Integer)
    tertiary_to = Column(Integer)
    tertiary_education = Column(String(100))
    course_type = Column(String(100))
    course = Column(String(255))

    # TUPAD
    id_type = Column(String(100))
    id_number = Column(String(100))
    occupation = Column(String(200))
    average_monthly_income = Column(String(50))
    dependent_name = Column(String(200))
    relationship_to_dependent = Column(String(100))

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
