"""
Applicant Pydantic schemas

GIP and TUPAD payloads form discriminated unions on ``program`` so a
single endpoint accepts either variant; fields belonging to the other
program are dropped.
"""
from typing import Annotated, Dict, List, Literal, Optional, Type, Union
from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import date, datetime

from app.applicants.constants import DEFAULT_ENCODER, Gender, Status


def _clean_upper(value):
    if isinstance(value, str):
        value = value.strip().upper()
        return value or None
    return value


def _clean(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class ApplicantSchema(BaseModel):
    """Shared model configuration"""

    class Config:
        from_attributes = True
        use_enum_values = True
        extra = "ignore"


class ApplicantFields(ApplicantSchema):
    """Fields captured for both programs"""
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    extension_name: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Gender
    barangay: Optional[str] = None
    residential_address: Optional[str] = None
    contact_number: Optional[str] = None
    telephone_number: Optional[str] = None
    email: Optional[EmailStr] = None
    civil_status: Optional[str] = None
    beneficiary_name: Optional[str] = None
    status: Status = Status.PENDING.value
    encoder: str = DEFAULT_ENCODER
    resume_file_name: Optional[str] = None
    resume_file_data: Optional[str] = None

    @field_validator(
        "first_name", "middle_name", "last_name", "extension_name", "barangay",
        "residential_address", "civil_status", "beneficiary_name",
        mode="before",
    )
    @classmethod
    def uppercase_common_text(cls, v):
        return _clean_upper(v)

    @field_validator(
        "contact_number", "telephone_number", "email", "resume_file_name", "resume_file_data",
        mode="before",
    )
    @classmethod
    def blank_common_to_none(cls, v):
        return _clean(v)

    @field_validator("encoder", mode="before")
    @classmethod
    def default_encoder(cls, v):
        return _clean(v) or DEFAULT_ENCODER


class GipFields(ApplicantSchema):
    """Education and placement fields of GIP applicants"""
    place_of_birth: Optional[str] = None
    school: Optional[str] = None
    primary_school_name: Optional[str] = None
    primary_from: Optional[int] = None
    primary_to: Optional[int] = None
    primary_education: Optional[str] = None
    junior_high_school_name: Optional[str] = None
    junior_high_from: Optional[int] = None
    junior_high_to: Optional[int] = None
    junior_high_education: Optional[str] = None
    senior_high_school_name: Optional[str] = None
    senior_high_from: Optional[int] = None
    senior_high_to: Optional[int] = None
    senior_high_education: Optional[str] = None
    tertiary_school_name: Optional[str] = None
    tertiary_from: Optional[int] = None
    tertiary_to: Optional[int] = None
    tertiary_education: Optional[str] = None
    course_type: Optional[str] = None
    course: Optional[str] = None
    photo_file_name: Optional[str] = None
    photo_file_data: Optional[str] = None

    @field_validator(
        "place_of_birth", "school", "primary_school_name", "junior_high_school_name",
        "senior_high_school_name", "tertiary_school_name", "tertiary_education",
        "course_type", "course",
        mode="before",
    )
    @classmethod
    def uppercase_gip_text(cls, v):
        return _clean_upper(v)

    @field_validator(
        "primary_from", "primary_to", "junior_high_from", "junior_high_to",
        "senior_high_from", "senior_high_to", "tertiary_from", "tertiary_to",
        "photo_file_name", "photo_file_data",
        mode="before",
    )
    @classmethod
    def blank_gip_to_none(cls, v):
        return _clean(v)


class TupadFields(ApplicantSchema):
    """Identification and livelihood fields of TUPAD applicants"""
    id_type: Optional[str] = None
    id_number: Optional[str] = None
    occupation: Optional[str] = None
    average_monthly_income: Optional[str] = None
    dependent_name: Optional[str] = None
    relationship_to_dependent: Optional[str] = None

    @field_validator(
        "id_type", "occupation", "dependent_name", "relationship_to_dependent",
        mode="before",
    )
    @classmethod
    def uppercase_tupad_text(cls, v):
        return _clean_upper(v)

    @field_validator("id_number", "average_monthly_income", mode="before")
    @classmethod
    def blank_tupad_to_none(cls, v):
        return _clean(v)


class GipApplicantCreate(ApplicantFields, GipFields):
    """GIP intake payload"""
    program: Literal["GIP"] = "GIP"


class TupadApplicantCreate(ApplicantFields, TupadFields):
    """TUPAD intake payload"""
    program: Literal["TUPAD"] = "TUPAD"


class GipApplicantUpdate(GipApplicantCreate):
    """GIP edit payload; ``version`` enables the stale-write check"""
    version: Optional[int] = None


class TupadApplicantUpdate(TupadApplicantCreate):
    """TUPAD edit payload; ``version`` enables the stale-write check"""
    version: Optional[int] = None


class RecordFields(ApplicantSchema):
    """System-managed fields of a stored applicant"""
    id: str
    code: str
    age: int
    interviewed: bool = False
    archived: bool = False
    archived_date: Optional[date] = None
    date_submitted: date
    version: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GipApplicant(RecordFields, GipApplicantCreate):
    """Stored GIP applicant"""
    program: Literal["GIP"] = "GIP"


class TupadApplicant(RecordFields, TupadApplicantCreate):
    """Stored TUPAD applicant"""
    program: Literal["TUPAD"] = "TUPAD"


ApplicantCreate = Annotated[Union[GipApplicantCreate, TupadApplicantCreate], Field(discriminator="program")]
ApplicantUpdate = Annotated[Union[GipApplicantUpdate, TupadApplicantUpdate], Field(discriminator="program")]
ApplicantRecord = Annotated[Union[GipApplicant, TupadApplicant], Field(discriminator="program")]

RECORD_TYPES: Dict[str, Type[RecordFields]] = {
    "GIP": GipApplicant,
    "TUPAD": TupadApplicant,
}


class ApplicantFilter(BaseModel):
    """List-view filter criteria; empty values and "All ..." sentinels match everything"""
    search_term: Optional[str] = None
    status: Optional[str] = None
    barangay: Optional[str] = None
    gender: Optional[str] = None
    age_range: Optional[str] = None
    education: Optional[str] = None


class NextCodeResponse(BaseModel):
    """Preview of the code the next intake would receive"""
    program: str
    code: str


class ApplicantList(BaseModel):
    """Applicant list view"""
    program: str
    scope: str  # active, archived or all
    total: int
    items: List[ApplicantRecord]
