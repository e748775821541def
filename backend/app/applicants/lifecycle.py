"""
Derived applicant fields: age, interview flag, education labels, contact formatting
"""
import re
from datetime import date
from typing import Dict, Optional

from app.applicants.constants import Status

# level prefix -> graduate label
EDUCATION_LEVELS = [
    ("primary", "ELEMENTARY GRADUATE"),
    ("junior_high", "JUNIOR HIGH SCHOOL GRADUATE"),
    ("senior_high", "SENIOR HIGH SCHOOL GRADUATE"),
]

CONTACT_DIGITS = re.compile(r"^09\d{9}$")


def calculate_age(birth_date: date, today: date) -> int:
    """Whole years between birth_date and today, adjusted for the birthday not yet reached"""
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def derive_interview_flag(old_status: str, new_status: str, old_flag: bool) -> bool:
    """
    Interview flag after a status change.

    Leaving PENDING marks the applicant interviewed; returning to PENDING
    clears the mark. Any other transition keeps the previous flag.
    """
    pending = Status.PENDING.value
    if old_status == pending and new_status != pending:
        return True
    if old_status != pending and new_status == pending:
        return False
    return old_flag


def education_labels(fields: Dict) -> Dict[str, Optional[str]]:
    """Graduate label per level; set only when school name and both years are present"""
    labels = {}
    for level, label in EDUCATION_LEVELS:
        complete = (
            fields.get(f"{level}_school_name")
            and fields.get(f"{level}_from") is not None
            and fields.get(f"{level}_to") is not None
        )
        labels[f"{level}_education"] = label if complete else None
    return labels


def normalize_contact_number(value: Optional[str]) -> Optional[str]:
    """Format an 11-digit mobile number as 09XX-XXX-XXXX; other input is returned unchanged"""
    if not value:
        return value
    digits = re.sub(r"[\s-]", "", value)
    if not CONTACT_DIGITS.match(digits):
        return value
    return f"{digits[:4]}-{digits[4:7]}-{digits[7:]}"
