"""
Notification routes
"""
from typing import Optional
from fastapi import APIRouter, Body, Depends, status
import structlog

from app.applicants.dependencies import get_applicant_service
from app.applicants.service import ApplicantService
from app.core.config import settings
from app.notifications.schemas import BulkEmailQueued, BulkEmailRequest, EmailResult, SendEmailRequest
from app.notifications.service import NotificationService, build_email_sender
from app.tasks.email_tasks import send_bulk_emails_task

router = APIRouter(prefix="/api/v1/notifications", tags=["Notifications"])
logger = structlog.get_logger()


def get_notification_service() -> NotificationService:
    return NotificationService(build_email_sender(settings), delay_seconds=settings.EMAIL_BULK_DELAY_SECONDS)


@router.post("/applicants/{applicant_id}/email", response_model=EmailResult)
async def send_applicant_email(
    applicant_id: str,
    request: Optional[SendEmailRequest] = Body(None),
    applicants: ApplicantService = Depends(get_applicant_service),
    notifications: NotificationService = Depends(get_notification_service),
):
    """Send the approval or rejection notice to one applicant"""
    applicant = await applicants.get(applicant_id)
    override = request.status if request else None
    return await notifications.send_to_applicant(applicant, override)


@router.post("/bulk", response_model=BulkEmailQueued, status_code=status.HTTP_202_ACCEPTED)
async def queue_bulk_email(request: BulkEmailRequest):
    """Queue notices for the selected applicants; progress is tracked by the task id"""
    task = send_bulk_emails_task.delay(request.program.value, request.applicant_ids)
    logger.info("bulk_email_queued", task_id=task.id, program=request.program.value, count=len(request.applicant_ids))
    return BulkEmailQueued(task_id=task.id, queued=len(request.applicant_ids))
