"""
Aggregations over an applicant snapshot

All functions are pure: they take the applicants of one program and never
touch storage. Archived applicants are always left out; a ``year`` narrows
the snapshot to applications submitted in that calendar year.
"""
from typing import Iterable, List, Optional

from app.applicants.constants import BARANGAYS, GENDERS, STATUS_COLORS, STATUSES, Gender
from app.core.exceptions import ValidationError
from app.reports.schemas import BarangayStats, GenderStats, Statistics, StatusStats


def active_applicants(applicants: Iterable, year: Optional[int] = None) -> List:
    """Non-archived applicants, optionally limited to one submission year"""
    active = [a for a in applicants if not a.archived]
    if year is not None:
        active = [a for a in active if a.date_submitted and a.date_submitted.year == year]
    return active


def _count(applicants: Iterable, **criteria) -> int:
    return sum(
        1 for a in applicants
        if all(getattr(a, field) == value for field, value in criteria.items())
    )


def compute_statistics(applicants: Iterable, year: Optional[int] = None) -> Statistics:
    active = active_applicants(applicants, year)
    male = Gender.MALE.value
    female = Gender.FEMALE.value

    counts = {
        "total_applicants": len(active),
        "interviewed": _count(active, interviewed=True),
        "barangays_covered": len({a.barangay for a in active if a.barangay}),
        "male_count": _count(active, gender=male),
        "female_count": _count(active, gender=female),
        "interviewed_male": _count(active, interviewed=True, gender=male),
        "interviewed_female": _count(active, interviewed=True, gender=female),
    }
    for status in STATUSES:
        key = status.lower()
        counts[key] = _count(active, status=status)
        counts[f"{key}_male"] = _count(active, status=status, gender=male)
        counts[f"{key}_female"] = _count(active, status=status, gender=female)

    return Statistics(**counts)


def compute_barangay_statistics(applicants: Iterable, year: Optional[int] = None) -> List[BarangayStats]:
    """One row per barangay in the fixed order, zero rows included"""
    active = active_applicants(applicants, year)
    rows = []
    for barangay in BARANGAYS:
        group = [a for a in active if a.barangay == barangay]
        rows.append(
            BarangayStats(
                barangay=barangay,
                total=len(group),
                male=_count(group, gender=Gender.MALE.value),
                female=_count(group, gender=Gender.FEMALE.value),
                **{status.lower(): _count(group, status=status) for status in STATUSES},
            )
        )
    return rows


def compute_status_statistics(applicants: Iterable, year: Optional[int] = None) -> List[StatusStats]:
    active = active_applicants(applicants, year)
    rows = []
    for status in STATUSES:
        group = [a for a in active if a.status == status]
        rows.append(
            StatusStats(
                status=status,
                total=len(group),
                male=_count(group, gender=Gender.MALE.value),
                female=_count(group, gender=Gender.FEMALE.value),
                color=STATUS_COLORS[status],
            )
        )
    return rows


def compute_gender_statistics(applicants: Iterable, year: Optional[int] = None) -> List[GenderStats]:
    active = active_applicants(applicants, year)
    rows = []
    for gender in GENDERS:
        group = [a for a in active if a.gender == gender]
        rows.append(
            GenderStats(
                gender=gender,
                total=len(group),
                **{status.lower(): _count(group, status=status) for status in STATUSES},
            )
        )
    return rows


def available_years(applicants: Iterable) -> List[int]:
    """Distinct submission years, newest first; archived applicants count too"""
    return sorted({a.date_submitted.year for a in applicants if a.date_submitted}, reverse=True)


def _require_status(status: str) -> str:
    status = (status or "").strip().upper()
    if status not in STATUSES:
        raise ValidationError(f"Unknown status: {status}", details={"status": status, "allowed": STATUSES})
    return status


def applicants_by_type(applicants: Iterable, report_type: str, year: Optional[int] = None) -> List:
    """``total`` returns every active applicant; any other value is read as a status"""
    active = active_applicants(applicants, year)
    if (report_type or "").strip().lower() == "total":
        return active
    status = _require_status(report_type)
    return [a for a in active if a.status == status]


def applicants_by_status(applicants: Iterable, status: str, year: Optional[int] = None) -> List:
    status = _require_status(status)
    return [a for a in active_applicants(applicants, year) if a.status == status]


def applicants_by_barangay(applicants: Iterable, barangay: str, year: Optional[int] = None) -> List:
    barangay = (barangay or "").strip().upper()
    return [a for a in active_applicants(applicants, year) if a.barangay == barangay]


def applicants_by_gender_and_status(
    applicants: Iterable, gender: str, status: str, year: Optional[int] = None
) -> List:
    gender = (gender or "").strip().upper()
    if gender not in GENDERS:
        raise ValidationError(f"Unknown gender: {gender}", details={"gender": gender, "allowed": GENDERS})
    status = _require_status(status)
    return [a for a in active_applicants(applicants, year) if a.gender == gender and a.status == status]
