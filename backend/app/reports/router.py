"""
Report routes
"""
from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, Query

from app.applicants.constants import Program
from app.applicants.dependencies import get_applicant_repository
from app.applicants.repository import ApplicantRepository
from app.reports.schemas import (
    BarangayStats,
    DrillDown,
    GenderStats,
    ProgramReport,
    Statistics,
    StatusStats,
)
from app.reports.service import ReportService

router = APIRouter(prefix="/api/v1/reports", tags=["Reports"])


def get_report_service(
    repository: ApplicantRepository = Depends(get_applicant_repository),
) -> ReportService:
    return ReportService(repository)


YearQuery = Annotated[
    Optional[int],
    Query(ge=1900, le=9999, description="Limit to applications submitted in this year"),
]


@router.get("/{program}", response_model=ProgramReport)
async def get_program_report(
    program: Program,
    year: YearQuery = None,
    service: ReportService = Depends(get_report_service),
):
    """Statistics, barangay, status and gender breakdowns in one response"""
    return await service.get_report(program.value, year)


@router.get("/{program}/statistics", response_model=Statistics)
async def get_statistics(
    program: Program,
    year: YearQuery = None,
    service: ReportService = Depends(get_report_service),
):
    return await service.get_statistics(program.value, year)


@router.get("/{program}/barangays", response_model=List[BarangayStats])
async def get_barangay_statistics(
    program: Program,
    year: YearQuery = None,
    service: ReportService = Depends(get_report_service),
):
    return await service.get_barangay_statistics(program.value, year)


@router.get("/{program}/statuses", response_model=List[StatusStats])
async def get_status_statistics(
    program: Program,
    year: YearQuery = None,
    service: ReportService = Depends(get_report_service),
):
    return await service.get_status_statistics(program.value, year)


@router.get("/{program}/genders", response_model=List[GenderStats])
async def get_gender_statistics(
    program: Program,
    year: YearQuery = None,
    service: ReportService = Depends(get_report_service),
):
    return await service.get_gender_statistics(program.value, year)


@router.get("/{program}/years", response_model=List[int])
async def get_available_years(
    program: Program,
    service: ReportService = Depends(get_report_service),
):
    """Submission years with data, newest first"""
    return await service.get_available_years(program.value)


@router.get("/{program}/applicants", response_model=DrillDown)
async def drill_down(
    program: Program,
    report_type: Optional[str] = Query(None, alias="type"),
    status: Optional[str] = None,
    barangay: Optional[str] = None,
    gender: Optional[str] = None,
    year: YearQuery = None,
    service: ReportService = Depends(get_report_service),
):
    """Applicants counted in a report cell"""
    items = await service.drill_down(
        program.value,
        report_type=report_type,
        status=status,
        barangay=barangay,
        gender=gender,
        year=year,
    )
    return DrillDown(program=program.value, year=year, total=len(items), items=items)
