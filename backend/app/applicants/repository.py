"""
Applicant persistence

``ApplicantRepository`` is the only way the rest of the application reads
or writes applicants. Two back ends implement it: a SQLAlchemy store and
a process-local in-memory store. ``build_repository`` picks one from an
explicit ``StorageConfig`` so the choice is made once, at wiring time.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
import structlog

from app.applicants.schemas import RECORD_TYPES
from app.core.database import create_engine, create_session_factory, init_db
from app.core.exceptions import ConflictError, DuplicateCodeError, NotFoundError, StorageError
from app.models.applicant import Applicant

logger = structlog.get_logger()

# Columns an update may change; identity and submission stamp are fixed
IMMUTABLE_FIELDS = {"id", "code", "program", "date_submitted", "created_at", "updated_at", "version"}


def to_record(row: Applicant):
    """ORM row -> GipApplicant / TupadApplicant"""
    return RECORD_TYPES[row.program].model_validate(row)


def editable_values(record) -> Dict:
    return record.model_dump(exclude=IMMUTABLE_FIELDS)


class ApplicantRepository(ABC):
    """Async storage interface for applicant records"""

    async def initialize(self) -> None:
        """Prepare the store; safe to call repeatedly"""

    async def close(self) -> None:
        """Release store resources"""

    @abstractmethod
    async def list(self, program: str) -> List:
        """All applicants of a program, archived included, in creation order"""

    async def list_codes(self, program: str) -> List[str]:
        return [applicant.code for applicant in await self.list(program)]

    @abstractmethod
    async def get(self, applicant_id: str):
        ...

    @abstractmethod
    async def create(self, record):
        """Insert a fully built record; raises DuplicateCodeError on a taken code"""

    @abstractmethod
    async def update(self, record, expected_version: Optional[int] = None):
        """Replace the editable fields of an existing record and bump its version"""

    @abstractmethod
    async def archive(self, applicant_id: str, archived_on: date):
        ...

    @abstractmethod
    async def unarchive(self, applicant_id: str):
        ...

    @abstractmethod
    async def delete(self, applicant_id: str) -> None:
        ...


class SqlAlchemyApplicantRepository(ApplicantRepository):
    """Applicants stored in a relational database through SQLAlchemy's async engine"""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = create_session_factory(engine)

    async def initialize(self) -> None:
        try:
            await init_db(self.engine)
        except SQLAlchemyError as e:
            logger.error("applicant_store_init_failed", error=str(e))
            raise StorageError("Could not initialize applicant storage", details={"error": str(e)})

    async def close(self) -> None:
        await self.engine.dispose()

    async def _get_row(self, session, applicant_id: str) -> Applicant:
        row = await session.get(Applicant, applicant_id)
        if row is None:
            raise NotFoundError("Applicant", applicant_id)
        return row

    async def list(self, program: str) -> List:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Applicant)
                    .where(Applicant.program == program)
                    .order_by(Applicant.created_at, Applicant.code)
                )
                return [to_record(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("applicant_list_failed", program=program, error=str(e))
            raise StorageError("Could not load applicants", details={"program": program})

    async def list_codes(self, program: str) -> List[str]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Applicant.code).where(Applicant.program == program)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("applicant_codes_failed", program=program, error=str(e))
            raise StorageError("Could not load applicant codes", details={"program": program})

    async def get(self, applicant_id: str):
        try:
            async with self.session_factory() as session:
                return to_record(await self._get_row(session, applicant_id))
        except SQLAlchemyError as e:
            logger.error("applicant_get_failed", applicant_id=applicant_id, error=str(e))
            raise StorageError("Could not load applicant", details={"id": applicant_id})

    async def create(self, record):
        values = record.model_dump(exclude={"created_at", "updated_at"})
        try:
            async with self.session_factory() as session:
                row = Applicant(**values)
                session.add(row)
                try:
                    await session.commit()
                except IntegrityError:
                    await session.rollback()
                    raise DuplicateCodeError(record.program, record.code)
                await session.refresh(row)
                return to_record(row)
        except SQLAlchemyError as e:
            logger.error("applicant_create_failed", code=record.code, error=str(e))
            raise StorageError("Could not save applicant", details={"code": record.code})

    async def update(self, record, expected_version: Optional[int] = None):
        # Version check and write are one statement; it runs first in the
        # transaction so no read lock is held while waiting to write
        stmt = update(Applicant).where(Applicant.id == record.id)
        if expected_version is not None:
            stmt = stmt.where(Applicant.version == expected_version)
        stmt = stmt.values(**editable_values(record), version=Applicant.version + 1).execution_options(
            synchronize_session=False
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                if result.rowcount == 0:
                    await session.rollback()
                    current = await self._get_row(session, record.id)
                    raise ConflictError(
                        details={
                            "id": record.id,
                            "expected_version": expected_version,
                            "current_version": current.version,
                        }
                    )
                row = await self._get_row(session, record.id)
                await session.commit()
                return to_record(row)
        except SQLAlchemyError as e:
            logger.error("applicant_update_failed", applicant_id=record.id, error=str(e))
            raise StorageError("Could not update applicant", details={"id": record.id})

    async def _set_archive(self, applicant_id: str, archived: bool, archived_on: Optional[date]):
        stmt = (
            update(Applicant)
            .where(Applicant.id == applicant_id)
            .values(archived=archived, archived_date=archived_on, version=Applicant.version + 1)
            .execution_options(synchronize_session=False)
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                if result.rowcount == 0:
                    raise NotFoundError("Applicant", applicant_id)
                row = await self._get_row(session, applicant_id)
                await session.commit()
                return to_record(row)
        except SQLAlchemyError as e:
            logger.error("applicant_archive_failed", applicant_id=applicant_id, error=str(e))
            raise StorageError("Could not change archive state", details={"id": applicant_id})

    async def archive(self, applicant_id: str, archived_on: date):
        return await self._set_archive(applicant_id, True, archived_on)

    async def unarchive(self, applicant_id: str):
        return await self._set_archive(applicant_id, False, None)

    async def delete(self, applicant_id: str) -> None:
        try:
            async with self.session_factory() as session:
                result = await session.execute(delete(Applicant).where(Applicant.id == applicant_id))
                if result.rowcount == 0:
                    raise NotFoundError("Applicant", applicant_id)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("applicant_delete_failed", applicant_id=applicant_id, error=str(e))
            raise StorageError("Could not delete applicant", details={"id": applicant_id})


class InMemoryApplicantRepository(ApplicantRepository):
    """Process-local store; contents are lost on restart"""

    def __init__(self):
        self._records: Dict[str, object] = {}

    def _require(self, applicant_id: str):
        record = self._records.get(applicant_id)
        if record is None:
            raise NotFoundError("Applicant", applicant_id)
        return record

    async def list(self, program: str) -> List:
        return [r.model_copy(deep=True) for r in self._records.values() if r.program == program]

    async def get(self, applicant_id: str):
        return self._require(applicant_id).model_copy(deep=True)

    async def create(self, record):
        for existing in self._records.values():
            if existing.program == record.program and existing.code == record.code:
                raise DuplicateCodeError(record.program, record.code)
        if record.id in self._records:
            raise StorageError("Applicant id already exists", details={"id": record.id})
        stored = record.model_copy(update={"created_at": datetime.now(timezone.utc)}, deep=True)
        self._records[stored.id] = stored
        return stored.model_copy(deep=True)

    async def update(self, record, expected_version: Optional[int] = None):
        current = self._require(record.id)
        if expected_version is not None and current.version != expected_version:
            raise ConflictError(
                details={"id": record.id, "expected_version": expected_version, "current_version": current.version}
            )
        changes = editable_values(record)
        changes.update(version=current.version + 1, updated_at=datetime.now(timezone.utc))
        stored = current.model_copy(update=changes, deep=True)
        self._records[stored.id] = stored
        return stored.model_copy(deep=True)

    async def _set_archive(self, applicant_id: str, archived: bool, archived_on: Optional[date]):
        current = self._require(applicant_id)
        stored = current.model_copy(
            update={
                "archived": archived,
                "archived_date": archived_on,
                "version": current.version + 1,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        self._records[applicant_id] = stored
        return stored.model_copy(deep=True)

    async def archive(self, applicant_id: str, archived_on: date):
        return await self._set_archive(applicant_id, True, archived_on)

    async def unarchive(self, applicant_id: str):
        return await self._set_archive(applicant_id, False, None)

    async def delete(self, applicant_id: str) -> None:
        self._require(applicant_id)
        del self._records[applicant_id]


class StorageConfig(BaseModel):
    """Which back end to build and how to reach it"""
    mode: str = "database"
    database_url: str = "sqlite+aiosqlite:///./soft_projects.db"
    echo: bool = False

    class Config:
        frozen = True

    @classmethod
    def from_settings(cls, settings) -> "StorageConfig":
        return cls(mode=settings.STORAGE_MODE, database_url=settings.DATABASE_URL, echo=settings.DB_ECHO)


def build_repository(config: StorageConfig) -> ApplicantRepository:
    """Construct the repository selected by ``config.mode``"""
    mode = config.mode.lower()
    if mode == "memory":
        logger.info("applicant_repository_selected", mode=mode)
        return InMemoryApplicantRepository()
    if mode == "database":
        logger.info("applicant_repository_selected", mode=mode, echo=config.echo)
        return SqlAlchemyApplicantRepository(create_engine(config.database_url, echo=config.echo))
    raise StorageError(f"Unknown storage mode: {config.mode}", details={"mode": config.mode})
