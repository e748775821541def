"""
Applicant list filtering
"""
import re
from typing import Iterable, List, Optional, Tuple

from app.applicants.schemas import ApplicantFilter
from app.core.exceptions import ValidationError

AGE_RANGE_PATTERN = re.compile(r"^\s*(\d+)\s*(?:-\s*(\d+)|\+)\s*$")


def is_unset(value: Optional[str]) -> bool:
    """Empty criteria and "All ..." sentinels (any case) disable a filter"""
    if value is None:
        return True
    value = value.strip().upper()
    return not value or value == "ALL" or value.startswith("ALL ")


def parse_age_range(value: str) -> Tuple[int, Optional[int]]:
    """Parse "18-25" into (18, 25) and "46+" into (46, None)"""
    match = AGE_RANGE_PATTERN.match(value)
    if not match:
        raise ValidationError(
            f"Invalid age range: {value}",
            details={"age_range": value, "expected": "min-max or min+"},
        )
    minimum = int(match.group(1))
    maximum = int(match.group(2)) if match.group(2) else None
    if maximum is not None and maximum < minimum:
        raise ValidationError(f"Invalid age range: {value}", details={"age_range": value})
    return minimum, maximum


def _matches_search(applicant, term: str) -> bool:
    haystack = (applicant.first_name, applicant.last_name, applicant.code, applicant.barangay)
    return any(term in (value or "").lower() for value in haystack)


def filter_applicants(applicants: Iterable, criteria: ApplicantFilter) -> List:
    """
    Applicants satisfying every active criterion, in their original order.

    The archive flag is not consulted; callers partition active and
    archived records before filtering.
    """
    result = list(applicants)

    if criteria.search_term and criteria.search_term.strip():
        term = criteria.search_term.strip().lower()
        result = [a for a in result if _matches_search(a, term)]

    if not is_unset(criteria.status):
        status = criteria.status.strip().upper()
        result = [a for a in result if a.status == status]

    if not is_unset(criteria.barangay):
        barangay = criteria.barangay.strip().upper()
        result = [a for a in result if (a.barangay or "") == barangay]

    if not is_unset(criteria.gender):
        gender = criteria.gender.strip().upper()
        result = [a for a in result if a.gender == gender]

    if not is_unset(criteria.age_range):
        minimum, maximum = parse_age_range(criteria.age_range)
        result = [
            a for a in result
            if a.age >= minimum and (maximum is None or a.age <= maximum)
        ]

    if not is_unset(criteria.education):
        education = criteria.education.strip().upper()
        result = [a for a in result if getattr(a, "tertiary_education", None) == education]

    return result
