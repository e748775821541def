"""
Applicant status emails

Messages are rendered from the jinja2 templates next to this module and
handed to an ``EmailSender``. The console sender only logs, which is the
default until SMTP credentials are configured.
"""
import asyncio
from abc import ABC, abstractmethod
from datetime import date
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Awaitable, Callable, Iterable, Optional

import aiosmtplib
from jinja2 import Environment, FileSystemLoader, select_autoescape
import structlog

from app.applicants.constants import PROGRAM_NAMES, Status
from app.core.config import settings
from app.core.exceptions import NotificationError, ValidationError
from app.notifications.schemas import BulkEmailResult, EmailNotification, EmailResult, RenderedEmail

logger = structlog.get_logger()

TEMPLATES_DIR = Path(__file__).parent / "templates"

HEADER_COLORS = {"GIP": "#dc2626", "TUPAD": "#16a34a"}

SUBJECTS = {
    Status.APPROVED.value: "Application Approved - {program} Program",
    Status.REJECTED.value: "Application Status Update - {program} Program",
}

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    keep_trailing_newline=True,
)


def render_email(notification: EmailNotification, today: Optional[date] = None) -> RenderedEmail:
    """Subject, HTML and plain-text bodies for a notice"""
    today = today or date.today()
    office_lines = [part.strip() for part in settings.OFFICE_NAME.split(",") if part.strip()]
    context = {
        "name": notification.name,
        "program": notification.program,
        "program_name": PROGRAM_NAMES[notification.program],
        "applicant_code": notification.applicant_code,
        "header_color": HEADER_COLORS[notification.program],
        "team_name": settings.SMTP_FROM_NAME,
        "office_lines": office_lines,
        "office_name": " - ".join(office_lines),
        "system_name": settings.APP_NAME,
        "year": today.year,
    }
    template = notification.status.lower()
    return RenderedEmail(
        subject=SUBJECTS[notification.status].format(program=notification.program),
        html=_env.get_template(f"{template}.html").render(**context),
        text=_env.get_template(f"{template}.txt").render(**context),
    )


class EmailSender(ABC):
    """Delivers a rendered message or raises NotificationError"""

    @abstractmethod
    async def send(self, recipient: str, email: RenderedEmail) -> None:
        ...


class ConsoleEmailSender(EmailSender):
    """Logs messages instead of delivering them"""

    async def send(self, recipient: str, email: RenderedEmail) -> None:
        logger.info("email_logged", to=recipient, subject=email.subject, body=email.text)


class SmtpEmailSender(EmailSender):
    """Async SMTP delivery through aiosmtplib"""

    def __init__(
        self,
        host: Optional[str],
        port: int,
        username: Optional[str],
        password: Optional[str],
        from_email: str,
        from_name: str,
        use_tls: bool = True,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email
        self.from_name = from_name
        self.use_tls = use_tls

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.username and self.password)

    def build_message(self, recipient: str, email: RenderedEmail) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = recipient
        message["Subject"] = email.subject
        message.attach(MIMEText(email.text, "plain"))
        message.attach(MIMEText(email.html, "html"))
        return message

    async def send(self, recipient: str, email: RenderedEmail) -> None:
        if not self.is_configured:
            raise NotificationError("SMTP is not configured", details={"host": self.host})
        try:
            await aiosmtplib.send(
                self.build_message(recipient, email),
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                start_tls=self.use_tls,
            )
        except aiosmtplib.SMTPException as e:
            logger.error("email_send_failed", to=recipient, error=str(e))
            raise NotificationError(str(e), details={"to": recipient})
        logger.info("email_sent", to=recipient, subject=email.subject)


def build_email_sender(config=settings) -> EmailSender:
    backend = config.EMAIL_BACKEND.lower()
    if backend == "smtp":
        return SmtpEmailSender(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USER,
            password=config.SMTP_PASSWORD,
            from_email=config.SMTP_FROM_EMAIL,
            from_name=config.SMTP_FROM_NAME,
            use_tls=config.SMTP_USE_TLS,
        )
    if backend == "console":
        return ConsoleEmailSender()
    raise ValidationError(f"Unknown email backend: {config.EMAIL_BACKEND}", details={"backend": config.EMAIL_BACKEND})


def full_name(applicant) -> str:
    return f"{applicant.first_name or ''} {applicant.last_name or ''}".strip()


class NotificationService:
    """Operator-triggered approval and rejection notices"""

    def __init__(
        self,
        sender: EmailSender,
        delay_seconds: float = 0.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.sender = sender
        self.delay_seconds = delay_seconds
        self.sleep = sleep

    async def send(self, notification: EmailNotification) -> EmailResult:
        email = render_email(notification)
        try:
            await self.sender.send(notification.recipient, email)
        except NotificationError as e:
            return EmailResult(success=False, message="Failed to send email", error=e.message)
        logger.info(
            "applicant_email_sent",
            code=notification.applicant_code,
            status=notification.status,
            program=notification.program,
        )
        return EmailResult(success=True, message="Email sent successfully")

    def notification_for(self, applicant, status: Optional[str] = None) -> EmailNotification:
        """Build a notice for an applicant; only APPROVED and REJECTED have templates"""
        status = status or applicant.status
        if status not in SUBJECTS:
            raise ValidationError(
                f"No email template for status {status}",
                details={"status": status, "allowed": sorted(SUBJECTS)},
            )
        if not applicant.email:
            raise ValidationError("No email address", details={"code": applicant.code})
        return EmailNotification(
            recipient=applicant.email,
            name=full_name(applicant),
            status=status,
            program=applicant.program,
            applicant_code=applicant.code,
        )

    async def send_to_applicant(self, applicant, status: Optional[str] = None) -> EmailResult:
        return await self.send(self.notification_for(applicant, status))

    async def send_bulk(self, applicants: Iterable) -> BulkEmailResult:
        """
        Send each applicant the notice for their current status.

        Problems with one applicant are recorded as "FIRST LAST: reason"
        and do not stop the batch. Sends are spaced by ``delay_seconds``.
        """
        result = BulkEmailResult()
        first = True
        for applicant in applicants:
            name = full_name(applicant)
            try:
                notification = self.notification_for(applicant)
            except ValidationError as e:
                result.failed += 1
                result.errors.append(f"{name}: {e.message}")
                continue

            if not first and self.delay_seconds:
                await self.sleep(self.delay_seconds)
            first = False

            outcome = await self.send(notification)
            if outcome.success:
                result.sent += 1
            else:
                result.failed += 1
                result.errors.append(f"{name}: {outcome.error or 'Unknown error'}")

        logger.info("bulk_email_finished", sent=result.sent, failed=result.failed)
        return result
