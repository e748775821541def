"""
Demo records for a fresh deployment
"""
from datetime import date
from typing import List

import structlog

from app.applicants.constants import Program
from app.applicants.schemas import GipApplicantCreate, TupadApplicantCreate
from app.applicants.service import ApplicantService

logger = structlog.get_logger()


def _birth_date(today: date, age: int) -> date:
    # January 1 keeps the age stable for the rest of the year
    return date(today.year - age, 1, 1)


def sample_applicants(today: date) -> List:
    gip_birth = _birth_date(today, 24)
    year = gip_birth.year
    return [
        GipApplicantCreate(
            first_name="Juan",
            middle_name="Santos",
            last_name="Dela Cruz",
            birth_date=gip_birth,
            place_of_birth="Santa Rosa City, Laguna",
            gender="MALE",
            barangay="BALIBAGO",
            residential_address="123 Main Street, Balibago, Sta. Rosa City",
            contact_number="09123456789",
            civil_status="SINGLE",
            primary_school_name="Balibago Elementary School",
            primary_from=year + 6,
            primary_to=year + 12,
            junior_high_school_name="Santa Rosa National High School",
            junior_high_from=year + 12,
            junior_high_to=year + 16,
            senior_high_school_name="Santa Rosa National High School",
            senior_high_from=year + 16,
            senior_high_to=year + 18,
            tertiary_school_name="Polytechnic University of the Philippines",
            tertiary_from=year + 18,
            tertiary_to=year + 22,
            tertiary_education="COLLEGE GRADUATE",
            course_type="BACHELOR",
            course="BS Information Technology",
            status="PENDING",
        ),
        TupadApplicantCreate(
            first_name="Maria",
            last_name="Santos",
            birth_date=_birth_date(today, 35),
            gender="FEMALE",
            barangay="DITA",
            residential_address="45 Rizal Street, Dita, Sta. Rosa City",
            contact_number="09987654321",
            civil_status="MARRIED",
            id_type="PhilSys ID",
            id_number="1234-5678-9012",
            occupation="Vendor",
            average_monthly_income="8000",
            dependent_name="Jose Santos",
            relationship_to_dependent="Son",
            status="APPROVED",
        ),
    ]


async def seed_sample_data(service: ApplicantService) -> int:
    """
    Insert the demo records unless either program already has applicants.

    Returns the number of records created.
    """
    for program in Program:
        if await service.list_applicants(program.value):
            logger.info("sample_data_skipped", reason="applicants_exist", program=program.value)
            return 0

    created = 0
    for payload in sample_applicants(service.today()):
        applicant = await service.create(payload)
        logger.info("sample_applicant_created", code=applicant.code, program=applicant.program)
        created += 1
    return created
