"""
Notification Pydantic schemas
"""
from typing import List, Literal, Optional
from pydantic import BaseModel, EmailStr, Field

from app.applicants.constants import Program

NoticeStatus = Literal["APPROVED", "REJECTED"]


class EmailNotification(BaseModel):
    """One status notice addressed to an applicant"""
    recipient: EmailStr
    name: str
    status: NoticeStatus
    program: Program
    applicant_code: str

    class Config:
        use_enum_values = True


class RenderedEmail(BaseModel):
    subject: str
    html: str
    text: str


class EmailResult(BaseModel):
    success: bool
    message: str
    error: Optional[str] = None


class BulkEmailResult(BaseModel):
    sent: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)


class SendEmailRequest(BaseModel):
    """Optional status override; defaults to the applicant's current status"""
    status: Optional[NoticeStatus] = None


class BulkEmailRequest(BaseModel):
    program: Program
    applicant_ids: List[str] = Field(..., min_length=1)


class BulkEmailQueued(BaseModel):
    task_id: str
    queued: int
