"""
Submission gate applied before any applicant write
"""
import re
from datetime import date
from typing import Dict

import structlog

from app.applicants.constants import AGE_LIMITS, BARANGAYS, TERTIARY_ATTAINMENTS, Program
from app.applicants.lifecycle import calculate_age
from app.core.exceptions import EligibilityError, ValidationError

logger = structlog.get_logger()

REQUIRED = "This field is required"

COMMON_REQUIRED = ["first_name", "last_name", "birth_date", "barangay", "contact_number"]
PROGRAM_REQUIRED = {
    Program.GIP.value: [
        "primary_school_name",
        "primary_from",
        "primary_to",
        "junior_high_school_name",
        "junior_high_from",
        "junior_high_to",
    ],
    Program.TUPAD.value: ["id_type"],
}

NAME_FIELDS = ["first_name", "middle_name", "last_name", "extension_name"]
NAME_PATTERN = re.compile(r"^[A-ZÑ\s'-]*$")
CONTACT_PATTERN = re.compile(r"^09\d{2}-\d{3}-\d{4}$")
TELEPHONE_PATTERN = re.compile(r"^[\d()\-\s]{1,20}$")

EDUCATION_LADDER = ["primary", "junior_high", "senior_high", "tertiary"]


def _check_education(fields: Dict, errors: Dict[str, str]) -> None:
    previous_end = None
    for level in EDUCATION_LADDER:
        start = fields.get(f"{level}_from")
        end = fields.get(f"{level}_to")
        if start is not None and end is not None and start > end:
            errors[f"{level}_to"] = "End year cannot be earlier than start year"
        if start is not None and previous_end is not None and start < previous_end:
            errors[f"{level}_from"] = "Start year cannot be earlier than the previous level's end year"
        if end is not None:
            previous_end = end

    attainment = fields.get("tertiary_education")
    if attainment and attainment not in TERTIARY_ATTAINMENTS:
        errors["tertiary_education"] = "Unknown educational attainment"


def validate_submission(applicant, today: date) -> int:
    """
    Check an intake or edit payload and return the applicant's age.

    Field problems are reported together in ``details["fields"]``; the age
    check runs only once every field is well formed.
    """
    fields = applicant.model_dump()
    program = fields["program"]
    errors: Dict[str, str] = {}

    for name in COMMON_REQUIRED + PROGRAM_REQUIRED.get(program, []):
        if fields.get(name) in (None, ""):
            errors[name] = REQUIRED

    for name in NAME_FIELDS:
        value = fields.get(name)
        if value and not NAME_PATTERN.match(value):
            errors[name] = "Only letters, spaces, apostrophes and hyphens are allowed"

    barangay = fields.get("barangay")
    if barangay and barangay not in BARANGAYS:
        errors["barangay"] = "Unknown barangay"

    contact = fields.get("contact_number")
    if contact and not CONTACT_PATTERN.match(contact):
        errors["contact_number"] = "Contact number must be 11 digits in the format 09XX-XXX-XXXX"

    telephone = fields.get("telephone_number")
    if telephone and not TELEPHONE_PATTERN.match(telephone):
        errors["telephone_number"] = "Telephone number may contain digits, parentheses, hyphens and spaces (max 20)"

    birth_date = fields.get("birth_date")
    if birth_date and birth_date > today:
        errors["birth_date"] = "Birth date cannot be in the future"

    if program == Program.GIP.value:
        _check_education(fields, errors)

    if errors:
        logger.info("applicant_validation_failed", program=program, fields=sorted(errors))
        raise ValidationError("Please correct the highlighted fields", details={"fields": errors})

    age = calculate_age(birth_date, today)
    minimum, maximum = AGE_LIMITS[program]
    if not minimum <= age <= maximum:
        logger.info("applicant_ineligible", program=program, age=age)
        raise EligibilityError(program, minimum, maximum, age)

    return age
