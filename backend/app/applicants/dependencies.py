"""
Applicant dependencies
"""
from functools import lru_cache

from fastapi import Depends

from app.applicants.repository import ApplicantRepository, StorageConfig, build_repository
from app.applicants.service import ApplicantService
from app.core.config import settings


@lru_cache()
def get_applicant_repository() -> ApplicantRepository:
    """Process-wide repository built from settings"""
    return build_repository(StorageConfig.from_settings(settings))


def get_applicant_service(
    repository: ApplicantRepository = Depends(get_applicant_repository),
) -> ApplicantService:
    return ApplicantService(repository, code_retries=settings.CODE_RESERVATION_RETRIES)
