"""
Report use cases; every call reads a fresh snapshot from the repository
"""
from typing import List, Optional

import structlog

from app.applicants.codes import code_prefix
from app.applicants.repository import ApplicantRepository
from app.core.exceptions import ValidationError
from app.reports import statistics
from app.reports.schemas import (
    BarangayStats,
    GenderStats,
    ProgramReport,
    Statistics,
    StatusStats,
)

logger = structlog.get_logger()


class ReportService:
    """Program statistics and drill-downs"""

    def __init__(self, repository: ApplicantRepository):
        self.repository = repository

    async def _snapshot(self, program: str) -> List:
        code_prefix(program)
        return await self.repository.list(program)

    async def get_statistics(self, program: str, year: Optional[int] = None) -> Statistics:
        return statistics.compute_statistics(await self._snapshot(program), year)

    async def get_barangay_statistics(self, program: str, year: Optional[int] = None) -> List[BarangayStats]:
        return statistics.compute_barangay_statistics(await self._snapshot(program), year)

    async def get_status_statistics(self, program: str, year: Optional[int] = None) -> List[StatusStats]:
        return statistics.compute_status_statistics(await self._snapshot(program), year)

    async def get_gender_statistics(self, program: str, year: Optional[int] = None) -> List[GenderStats]:
        return statistics.compute_gender_statistics(await self._snapshot(program), year)

    async def get_available_years(self, program: str) -> List[int]:
        return statistics.available_years(await self._snapshot(program))

    async def get_report(self, program: str, year: Optional[int] = None) -> ProgramReport:
        """All four aggregates computed from a single snapshot"""
        applicants = await self._snapshot(program)
        report = ProgramReport(
            program=program,
            year=year,
            statistics=statistics.compute_statistics(applicants, year),
            barangays=statistics.compute_barangay_statistics(applicants, year),
            statuses=statistics.compute_status_statistics(applicants, year),
            genders=statistics.compute_gender_statistics(applicants, year),
        )
        logger.info("report_generated", program=program, year=year, total=report.statistics.total_applicants)
        return report

    async def drill_down(
        self,
        program: str,
        report_type: Optional[str] = None,
        status: Optional[str] = None,
        barangay: Optional[str] = None,
        gender: Optional[str] = None,
        year: Optional[int] = None,
    ) -> List:
        """
        Applicants behind a report cell.

        A barangay selects the barangay breakdown, a gender needs a status,
        a status alone selects the status breakdown, and otherwise
        ``report_type`` ("total" or a status) applies.
        """
        applicants = await self._snapshot(program)
        if barangay:
            return statistics.applicants_by_barangay(applicants, barangay, year)
        if gender:
            if not status:
                raise ValidationError("A status is required with a gender drill-down", details={"gender": gender})
            return statistics.applicants_by_gender_and_status(applicants, gender, status, year)
        if status:
            return statistics.applicants_by_status(applicants, status, year)
        return statistics.applicants_by_type(applicants, report_type or "total", year)
