"""
Tests for the SQLAlchemy applicant store against a temporary SQLite file
"""
import asyncio
from datetime import date

import pytest

from app.applicants.repository import (
    InMemoryApplicantRepository,
    SqlAlchemyApplicantRepository,
    StorageConfig,
    build_repository,
)
from app.applicants.schemas import GipApplicantCreate, GipApplicantUpdate, TupadApplicantCreate
from app.applicants.service import ApplicantService
from app.core.database import get_database_url
from app.core.exceptions import ConflictError, DuplicateCodeError, NotFoundError, StorageError


@pytest.fixture
async def sql_repository(tmp_path):
    repository = build_repository(
        StorageConfig(mode="database", database_url=f"sqlite+aiosqlite:///{tmp_path / 'applicants.db'}")
    )
    await repository.initialize()
    yield repository
    await repository.close()


@pytest.fixture
def sql_service(sql_repository, today):
    return ApplicantService(sql_repository, today=lambda: today)


class TestBuildRepository:
    def test_memory_mode(self):
        assert isinstance(build_repository(StorageConfig(mode="memory")), InMemoryApplicantRepository)

    def test_database_mode(self, tmp_path):
        repository = build_repository(
            StorageConfig(mode="database", database_url=f"sqlite:///{tmp_path / 'x.db'}")
        )
        assert isinstance(repository, SqlAlchemyApplicantRepository)
        assert repository.engine.url.drivername == "sqlite+aiosqlite"

    def test_unknown_mode(self):
        with pytest.raises(StorageError):
            build_repository(StorageConfig(mode="spreadsheet"))


class TestSqlAlchemyRepository:
    async def test_round_trip_keeps_variant(self, sql_service, sql_repository, gip_data, tupad_data):
        gip = await sql_service.create(GipApplicantCreate(**gip_data()))
        tupad = await sql_service.create(TupadApplicantCreate(**tupad_data()))

        loaded = await sql_repository.get(gip.id)
        assert loaded.program == "GIP"
        assert loaded.primary_school_name == "DITA ELEMENTARY SCHOOL"
        assert loaded.birth_date == date(2000, 3, 10)
        assert loaded.created_at is not None

        tupads = await sql_repository.list("TUPAD")
        assert [a.id for a in tupads] == [tupad.id]
        assert tupads[0].id_type == "UMID"
        assert not hasattr(tupads[0], "primary_school_name")

    async def test_list_is_scoped_to_program(self, sql_service, sql_repository, gip_data, tupad_data):
        await sql_service.create(GipApplicantCreate(**gip_data()))
        await sql_service.create(GipApplicantCreate(**gip_data(first_name="Bea")))
        await sql_service.create(TupadApplicantCreate(**tupad_data()))
        assert sorted(await sql_repository.list_codes("GIP")) == ["GIP-000001", "GIP-000002"]
        assert len(await sql_repository.list("TUPAD")) == 1

    async def test_duplicate_code_is_rejected(self, sql_service, sql_repository, gip_data):
        created = await sql_service.create(GipApplicantCreate(**gip_data()))
        clone = created.model_copy(update={"id": "another-id"})
        with pytest.raises(DuplicateCodeError):
            await sql_repository.create(clone)

    async def test_update_and_interview_flag(self, sql_service, gip_data):
        created = await sql_service.create(GipApplicantCreate(**gip_data()))
        updated = await sql_service.update(created.id, GipApplicantUpdate(**gip_data(status="APPROVED", version=1)))
        assert updated.status == "APPROVED"
        assert updated.interviewed is True
        assert updated.version == 2
        with pytest.raises(ConflictError):
            await sql_service.update(created.id, GipApplicantUpdate(**gip_data(version=1)))

    async def test_archive_cycle(self, sql_service, sql_repository, gip_data, today):
        created = await sql_service.create(GipApplicantCreate(**gip_data()))
        archived = await sql_service.archive(created.id)
        assert (archived.archived, archived.archived_date) == (True, today)
        restored = await sql_service.unarchive(created.id)
        assert (restored.archived, restored.archived_date) == (False, None)

    async def test_delete(self, sql_service, sql_repository, gip_data):
        created = await sql_service.create(GipApplicantCreate(**gip_data()))
        await sql_repository.delete(created.id)
        with pytest.raises(NotFoundError):
            await sql_repository.get(created.id)
        with pytest.raises(NotFoundError):
            await sql_repository.delete(created.id)

    async def test_initialize_is_idempotent(self, sql_repository):
        await sql_repository.initialize()
        assert await sql_repository.list("GIP") == []


class TestConcurrentEdits:
    async def test_same_version_only_one_write_lands(self, sql_service, gip_data):
        created = await sql_service.create(GipApplicantCreate(**gip_data()))
        results = await asyncio.gather(
            sql_service.update(created.id, GipApplicantUpdate(**gip_data(status="APPROVED", version=1))),
            sql_service.update(created.id, GipApplicantUpdate(**gip_data(status="REJECTED", version=1))),
            return_exceptions=True,
        )
        saved = [r for r in results if not isinstance(r, Exception)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(saved) == 1
        assert len(conflicts) == 1

        stored = await sql_service.get(created.id)
        assert stored.version == 2
        assert stored.status == saved[0].status

    async def test_unversioned_edits_both_land(self, sql_service, gip_data):
        created = await sql_service.create(GipApplicantCreate(**gip_data()))
        results = await asyncio.gather(
            sql_service.update(created.id, GipApplicantUpdate(**gip_data(status="APPROVED"))),
            sql_service.update(created.id, GipApplicantUpdate(**gip_data(status="DEPLOYED"))),
        )
        assert sorted(r.version for r in results) == [2, 3]

        stored = await sql_service.get(created.id)
        assert stored.version == 3
        assert stored.interviewed is True

    async def test_stale_version_at_repository(self, sql_service, sql_repository, gip_data):
        created = await sql_service.create(GipApplicantCreate(**gip_data()))
        await sql_repository.update(created, expected_version=1)
        with pytest.raises(ConflictError):
            await sql_repository.update(created, expected_version=1)
        assert (await sql_repository.get(created.id)).version == 2

    async def test_missing_record_is_not_a_conflict(self, sql_service, sql_repository, gip_data):
        created = await sql_service.create(GipApplicantCreate(**gip_data()))
        await sql_repository.delete(created.id)
        with pytest.raises(NotFoundError):
            await sql_repository.update(created, expected_version=1)


class TestDatabaseUrl:
    def test_sqlite_gets_async_driver(self):
        assert get_database_url("sqlite:///./soft.db") == "sqlite+aiosqlite:///./soft.db"

    def test_explicit_driver_is_kept(self):
        url = "sqlite+aiosqlite:///./soft.db"
        assert get_database_url(url) == url
        assert get_database_url("postgresql+psycopg://db/soft") == "postgresql+psycopg://db/soft"
