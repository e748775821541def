"""
Applicant routes
"""
from typing import Annotated, Optional, Union
from fastapi import APIRouter, Body, Depends, Query, Response, status
import structlog

from app.applicants.constants import Program
from app.applicants.dependencies import get_applicant_service
from app.applicants.schemas import (
    ApplicantFilter,
    ApplicantList,
    GipApplicant,
    GipApplicantCreate,
    GipApplicantUpdate,
    NextCodeResponse,
    TupadApplicant,
    TupadApplicantCreate,
    TupadApplicantUpdate,
)
from app.applicants.service import ApplicantService

router = APIRouter(prefix="/api/v1/applicants", tags=["Applicants"])
logger = structlog.get_logger()

ApplicantResponse = Union[GipApplicant, TupadApplicant]
CreateBody = Annotated[Union[GipApplicantCreate, TupadApplicantCreate], Body(discriminator="program")]
UpdateBody = Annotated[Union[GipApplicantUpdate, TupadApplicantUpdate], Body(discriminator="program")]


@router.get("/", response_model=ApplicantList)
async def list_applicants(
    program: Program = Query(...),
    scope: str = Query("active", pattern="^(active|archived|all)$"),
    search_term: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    barangay: Optional[str] = None,
    gender: Optional[str] = None,
    age_range: Optional[str] = None,
    education: Optional[str] = None,
    service: ApplicantService = Depends(get_applicant_service),
):
    """List applicants of a program; filters combine with AND"""
    criteria = ApplicantFilter(
        search_term=search_term,
        status=status_filter,
        barangay=barangay,
        gender=gender,
        age_range=age_range,
        education=education,
    )
    items = await service.list_view(program.value, scope=scope, criteria=criteria)
    return ApplicantList(program=program.value, scope=scope, total=len(items), items=items)


@router.get("/next-code", response_model=NextCodeResponse)
async def preview_next_code(
    program: Program = Query(...),
    service: ApplicantService = Depends(get_applicant_service),
):
    """Code the next intake would receive (not reserved)"""
    return NextCodeResponse(program=program.value, code=await service.next_code(program.value))


@router.get("/{applicant_id}", response_model=ApplicantResponse)
async def get_applicant(
    applicant_id: str,
    service: ApplicantService = Depends(get_applicant_service),
):
    """Get applicant details"""
    return await service.get(applicant_id)


@router.post("/", response_model=ApplicantResponse, status_code=status.HTTP_201_CREATED)
async def create_applicant(
    payload: CreateBody,
    service: ApplicantService = Depends(get_applicant_service),
):
    """Register a new applicant"""
    return await service.create(payload)


@router.put("/{applicant_id}", response_model=ApplicantResponse)
async def update_applicant(
    applicant_id: str,
    payload: UpdateBody,
    service: ApplicantService = Depends(get_applicant_service),
):
    """Update an applicant; send ``version`` to reject stale edits"""
    return await service.update(applicant_id, payload)


@router.post("/{applicant_id}/archive", response_model=ApplicantResponse)
async def archive_applicant(
    applicant_id: str,
    service: ApplicantService = Depends(get_applicant_service),
):
    return await service.archive(applicant_id)


@router.post("/{applicant_id}/unarchive", response_model=ApplicantResponse)
async def unarchive_applicant(
    applicant_id: str,
    service: ApplicantService = Depends(get_applicant_service),
):
    return await service.unarchive(applicant_id)


@router.delete("/{applicant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_applicant(
    applicant_id: str,
    service: ApplicantService = Depends(get_applicant_service),
):
    """Permanently delete an applicant"""
    await service.delete(applicant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
