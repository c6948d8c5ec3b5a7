"""Shared helpers for tests: in-memory SQLite sessions, seeded accounts and an API test case."""

import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from conference.core.database import get_db
from conference.core.tokens import TokenDomain, issue_token
from conference.models import Base, ParticipantAccount, StaffAccount
from conference.schemas.participant import ParticipantCreate
from conference.services import credentials

DEFAULT_PASSWORD = "correct-horse-battery"


def make_engine() -> tuple[Engine, sessionmaker]:
    """Fresh in-memory database with all tables and foreign keys enforced."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    return engine, sessionmaker(bind=engine, autoflush=False, autocommit=False)


def make_account(
    db: Session,
    email: str = "ada@example.com",
    password: str = DEFAULT_PASSWORD,
    role: str = "participant",
) -> ParticipantAccount:
    account = credentials.register_account(
        db, email=email, password=password, first_name="Ada", last_name="Lovelace"
    )
    if role != "participant":
        account = credentials.set_account_role(db, account.id, role)
    return account


def make_staff(
    db: Session,
    email: str = "admin@example.com",
    password: str = DEFAULT_PASSWORD,
    role: str = "admin",
) -> StaffAccount:
    return credentials.create_staff(
        db, email=email, password=password, first_name="Grace", last_name="Hopper", role=role
    )


def participant_details(**overrides: object) -> ParticipantCreate:
    data: dict[str, object] = {
        "full_name": "Ada Lovelace",
        "phone": "+44 20 7946 0000",
        "country": "United Kingdom",
        "registration_type": "attendance",
    }
    data.update(overrides)
    return ParticipantCreate(**data)


class DatabaseTestCase(unittest.TestCase):
    """Gives each test its own in-memory database and an open session as self.db."""

    def setUp(self) -> None:
        self.engine, self.SessionLocal = make_engine()
        self.db = self.SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose get_db yields sessions on the same database."""

    prefix = "/api/v1"

    def setUp(self) -> None:
        super().setUp()
        from conference.main import app

        def override_get_db() -> Generator[Session, None, None]:
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        self.app = app
        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.app.dependency_overrides.clear()
        super().tearDown()

    def url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    def participant_headers(self, account: ParticipantAccount) -> dict[str, str]:
        return {"Authorization": f"Bearer {issue_token(account, TokenDomain.PARTICIPANT)}"}

    def staff_headers(self, staff: StaffAccount) -> dict[str, str]:
        return {"Authorization": f"Bearer {issue_token(staff, TokenDomain.STAFF)}"}
