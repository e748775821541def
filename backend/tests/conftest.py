"""
SOFT Projects - Test Configuration and Fixtures
"""
import itertools
import os
from datetime import date
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

# Set testing environment
os.environ["STORAGE_MODE"] = "memory"
os.environ["EMAIL_BACKEND"] = "console"
os.environ["ENVIRONMENT"] = "testing"

from app.main import app
from app.applicants.constants import CODE_PREFIXES
from app.applicants.dependencies import get_applicant_repository, get_applicant_service
from app.applicants.repository import InMemoryApplicantRepository
from app.applicants.schemas import RECORD_TYPES
from app.applicants.service import ApplicantService
from app.notifications.router import get_notification_service
from app.notifications.service import EmailSender, NotificationService

TODAY = date(2025, 6, 15)


class RecordingSender(EmailSender):
    """Collects messages instead of sending them"""

    def __init__(self):
        self.sent = []

    async def send(self, recipient, email):
        self.sent.append((recipient, email))


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def repository() -> InMemoryApplicantRepository:
    return InMemoryApplicantRepository()


@pytest.fixture
def service(repository, today) -> ApplicantService:
    return ApplicantService(repository, today=lambda: today)


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def notification_service(sender) -> NotificationService:
    async def no_sleep(_seconds):
        return None

    return NotificationService(sender, delay_seconds=0.5, sleep=no_sleep)


@pytest.fixture
async def client(repository, service, notification_service) -> AsyncGenerator[AsyncClient, None]:
    """Test client wired to the in-memory repository"""
    app.dependency_overrides[get_applicant_repository] = lambda: repository
    app.dependency_overrides[get_applicant_service] = lambda: service
    app.dependency_overrides[get_notification_service] = lambda: notification_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def gip_data():
    """JSON-ready GIP intake payload (age 25 on TODAY)"""
    def _make(**overrides):
        data = {
            "program": "GIP",
            "first_name": "Ana",
            "middle_name": "Lopez",
            "last_name": "Reyes",
            "birth_date": "2000-03-10",
            "gender": "FEMALE",
            "barangay": "DITA",
            "contact_number": "09171234567",
            "email": "ana.reyes@mail.com",
            "primary_school_name": "Dita Elementary School",
            "primary_from": 2006,
            "primary_to": 2012,
            "junior_high_school_name": "Santa Rosa National High School",
            "junior_high_from": 2012,
            "junior_high_to": 2016,
            "tertiary_education": "COLLEGE GRADUATE",
        }
        data.update(overrides)
        return data
    return _make


@pytest.fixture
def tupad_data():
    """JSON-ready TUPAD intake payload (age 40 on TODAY)"""
    def _make(**overrides):
        data = {
            "program": "TUPAD",
            "first_name": "Pedro",
            "last_name": "Cruz",
            "birth_date": "1985-01-20",
            "gender": "MALE",
            "barangay": "POOC",
            "contact_number": "0918 765 4321",
            "id_type": "UMID",
            "occupation": "Driver",
        }
        data.update(overrides)
        return data
    return _make


@pytest.fixture
def make_record():
    """Build stored applicant records directly, bypassing validation"""
    counter = itertools.count(1)

    def _make(program="GIP", **overrides):
        n = next(counter)
        values = {
            "id": f"id-{n}",
            "code": f"{CODE_PREFIXES[program]}-{n:06d}",
            "first_name": "JUAN",
            "last_name": "TESTER",
            "birth_date": date(2000, 1, 1),
            "age": 25,
            "gender": "MALE",
            "barangay": "DITA",
            "status": "PENDING",
            "date_submitted": date(2025, 1, 10),
        }
        values.update(overrides)
        return RECORD_TYPES[program](**values)

    return _make
