"""
Applicant use cases: intake, edit, archive lifecycle and list views
"""
import uuid
from datetime import date
from typing import Callable, List, Optional

import structlog

from app.applicants.codes import code_prefix, next_code
from app.applicants.constants import Program
from app.applicants.filters import filter_applicants
from app.applicants.lifecycle import derive_interview_flag, education_labels, normalize_contact_number
from app.applicants.repository import ApplicantRepository
from app.applicants.schemas import RECORD_TYPES, ApplicantFilter
from app.applicants.validation import validate_submission
from app.core.exceptions import ConflictError, DuplicateCodeError, StorageError, ValidationError

logger = structlog.get_logger()


def prepare_payload(payload):
    """Apply derived formatting before validation: contact number layout and education labels"""
    changes = {"contact_number": normalize_contact_number(payload.contact_number)}
    if payload.program == Program.GIP.value:
        changes.update(education_labels(payload.model_dump()))
    return payload.model_copy(update=changes)


class ApplicantService:
    """Applicant operations on top of an ApplicantRepository"""

    def __init__(
        self,
        repository: ApplicantRepository,
        today: Callable[[], date] = date.today,
        code_retries: int = 5,
        update_retries: int = 5,
    ):
        self.repository = repository
        self.today = today
        self.code_retries = code_retries
        self.update_retries = update_retries

    async def list_applicants(self, program: str) -> List:
        code_prefix(program)
        return await self.repository.list(program)

    async def list_view(
        self,
        program: str,
        scope: str = "active",
        criteria: Optional[ApplicantFilter] = None,
    ) -> List:
        """
        Applicants of one list view narrowed by the filter criteria.

        ``scope`` is "active" (default roster), "archived" or "all".
        """
        applicants = await self.list_applicants(program)
        if scope == "active":
            applicants = [a for a in applicants if not a.archived]
        elif scope == "archived":
            applicants = [a for a in applicants if a.archived]
        elif scope != "all":
            raise ValidationError(f"Unknown list scope: {scope}", details={"scope": scope})
        if criteria is None:
            return applicants
        return filter_applicants(applicants, criteria)

    async def filter(self, program: str, criteria: ApplicantFilter) -> List:
        """Filter over every applicant of the program, archived included"""
        return await self.list_view(program, scope="all", criteria=criteria)

    async def get(self, applicant_id: str):
        return await self.repository.get(applicant_id)

    async def next_code(self, program: str) -> str:
        return next_code(program, await self.repository.list_codes(program))

    async def create(self, payload):
        """
        Validate and store a new applicant.

        The code is derived from the codes already stored. When another
        writer takes the same code first, the store rejects the insert and
        the code is recomputed, up to ``code_retries`` attempts.
        """
        today = self.today()
        payload = prepare_payload(payload)
        age = validate_submission(payload, today)
        record_type = RECORD_TYPES[payload.program]
        values = payload.model_dump()

        for attempt in range(1, self.code_retries + 1):
            code = await self.next_code(payload.program)
            record = record_type(
                **values,
                id=uuid.uuid4().hex,
                code=code,
                age=age,
                interviewed=False,
                archived=False,
                archived_date=None,
                date_submitted=today,
                version=1,
            )
            try:
                created = await self.repository.create(record)
            except DuplicateCodeError:
                logger.warning("applicant_code_taken", program=payload.program, code=code, attempt=attempt)
                continue
            logger.info("applicant_created", applicant_id=created.id, code=created.code, program=created.program)
            return created

        logger.error("applicant_code_reservation_failed", program=payload.program, attempts=self.code_retries)
        raise StorageError(
            "Could not reserve an applicant code, please try again",
            details={"program": payload.program, "attempts": self.code_retries},
        )

    async def update(self, applicant_id: str, payload):
        """
        Replace an applicant's editable fields.

        The write only lands if the record still has the version it was
        derived from, so the interview flag always follows the status being
        replaced. A payload ``version`` makes a stale edit fail with
        ConflictError; without one the edit is re-derived against the latest
        record and retried (last write wins).
        """
        current = await self.repository.get(applicant_id)
        if payload.program != current.program:
            raise ValidationError(
                "Program cannot be changed",
                details={"program": payload.program, "current_program": current.program},
            )

        payload = prepare_payload(payload)
        age = validate_submission(payload, self.today())
        values = payload.model_dump(exclude={"version"})

        for attempt in range(1, self.update_retries + 1):
            interviewed = derive_interview_flag(current.status, payload.status, current.interviewed)
            record = type(current)(
                **values,
                id=current.id,
                code=current.code,
                age=age,
                interviewed=interviewed,
                archived=current.archived,
                archived_date=current.archived_date,
                date_submitted=current.date_submitted,
                version=current.version,
                created_at=current.created_at,
            )
            expected = payload.version if payload.version is not None else current.version
            try:
                updated = await self.repository.update(record, expected_version=expected)
            except ConflictError:
                if payload.version is not None:
                    raise
                logger.warning("applicant_update_retried", applicant_id=applicant_id, attempt=attempt)
                current = await self.repository.get(applicant_id)
                continue

            logger.info(
                "applicant_updated",
                applicant_id=applicant_id,
                old_status=current.status,
                new_status=updated.status,
                interviewed=updated.interviewed,
            )
            return updated

        raise ConflictError(
            "Applicant is being edited elsewhere, please try again",
            details={"id": applicant_id, "attempts": self.update_retries},
        )

    async def archive(self, applicant_id: str):
        archived = await self.repository.archive(applicant_id, self.today())
        logger.info("applicant_archived", applicant_id=applicant_id, archived_date=str(archived.archived_date))
        return archived

    async def unarchive(self, applicant_id: str):
        restored = await self.repository.unarchive(applicant_id)
        logger.info("applicant_unarchived", applicant_id=applicant_id)
        return restored

    async def delete(self, applicant_id: str) -> None:
        await self.repository.delete(applicant_id)
        logger.info("applicant_deleted", applicant_id=applicant_id)
