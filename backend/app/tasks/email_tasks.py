"""
Bulk notification tasks
"""
import asyncio
from typing import List

from celery import Task
import structlog

from app.applicants.repository import StorageConfig, build_repository
from app.core.celery_app import celery_app
from app.core.config import settings
from app.core.exceptions import NotFoundError, StorageError
from app.notifications.schemas import BulkEmailResult
from app.notifications.service import NotificationService, build_email_sender

logger = structlog.get_logger()


async def send_bulk_emails(program: str, applicant_ids: List[str], repository=None, sender=None) -> BulkEmailResult:
    """Load the selected applicants of a program and send each their status notice"""
    owns_repository = repository is None
    repository = repository or build_repository(StorageConfig.from_settings(settings))
    service = NotificationService(
        sender or build_email_sender(settings),
        delay_seconds=settings.EMAIL_BULK_DELAY_SECONDS,
    )
    missing: List[str] = []
    applicants = []
    try:
        for applicant_id in applicant_ids:
            try:
                applicant = await repository.get(applicant_id)
            except NotFoundError:
                missing.append(applicant_id)
                continue
            if applicant.program != program:
                missing.append(applicant_id)
                continue
            applicants.append(applicant)
    finally:
        if owns_repository:
            await repository.close()

    result = await service.send_bulk(applicants)
    for applicant_id in missing:
        result.failed += 1
        result.errors.append(f"{applicant_id}: Applicant not found in {program}")
    return result


@celery_app.task(bind=True, max_retries=3)
def send_bulk_emails_task(self: Task, program: str, applicant_ids: List[str]):
    """Send status notices to a batch of applicants"""
    logger.info("bulk_email_started", program=program, count=len(applicant_ids))
    try:
        result = asyncio.run(send_bulk_emails(program, applicant_ids))
    except StorageError as e:
        logger.exception("bulk_email_storage_error", program=program, error=e.message)
        raise self.retry(exc=e, countdown=60)
    return result.model_dump()
