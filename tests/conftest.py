"""
Pytest fixtures for the HR reporting test suite.

Provides:
- A file-backed SQLite operational store per test (all tables created)
- Session factory / session fixtures
- A seeding helper that commits organizations, employees, enrollments, claims
- Deterministic clock and structured log capture
"""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from hr_kernel.db.base import Base
from hr_kernel.db.engine import create_engine_from_url
from hr_kernel.domain.clock import DeterministicClock
from hr_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from hr_kernel.models import (
    Claim,
    ClaimStatus,
    Employee,
    EmployeeStatus,
    Enrollment,
    EnrollmentStatus,
    InsurancePolicy,
    Organization,
)


FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture hr_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, reporting_service):
            reporting_service.dashboard()
            logs = captured_logs()
            assert any(r["message"] == "dashboard_generated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("hr_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


def make_store_engine(directory, name: str = "store.db") -> Engine:
    """A private SQLite database file, configured the way production opens it."""
    return create_engine_from_url(f"sqlite:///{directory / name}")


@pytest.fixture
def engine(tmp_path) -> Generator[Engine, None, None]:
    eng = make_store_engine(tmp_path)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def session(session_factory) -> Generator[Session, None, None]:
    sess = session_factory()
    yield sess
    sess.close()


@pytest.fixture
def empty_engine(tmp_path) -> Generator[Engine, None, None]:
    """An engine whose database has no tables -- every query fails."""
    eng = make_store_engine(tmp_path, "empty.db")
    yield eng
    eng.dispose()


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(FIXED_NOW)


# =============================================================================
# Seeding helper
# =============================================================================


class StoreSeeder:
    """Creates and commits operational records for a test."""

    def __init__(self, session: Session):
        self.session = session

    def _save(self, obj):
        self.session.add(obj)
        self.session.commit()
        return obj

    def organization(self, name: str, org_id: int | None = None) -> Organization:
        return self._save(Organization(id=org_id, name=name))

    def employees(
        self,
        organization: Organization,
        count: int,
        status: EmployeeStatus = EmployeeStatus.ACTIVE,
    ) -> list[Employee]:
        created = [
            Employee(
                organization_id=organization.id,
                full_name=f"{organization.name} employee {i}",
                status=status.value,
            )
            for i in range(count)
        ]
        self.session.add_all(created)
        self.session.commit()
        return created

    def employee(
        self,
        organization: Organization,
        status: EmployeeStatus = EmployeeStatus.ACTIVE,
    ) -> Employee:
        return self.employees(organization, 1, status)[0]

    def policy(self, code: str = "MED-STD") -> InsurancePolicy:
        existing = self.session.query(InsurancePolicy).filter_by(code=code).one_or_none()
        if existing is not None:
            return existing
        return self._save(InsurancePolicy(code=code, name=f"Policy {code}"))

    def enrollment(
        self,
        employee: Employee,
        premium: str | Decimal = "0.00",
        status: EnrollmentStatus = EnrollmentStatus.ACTIVE,
    ) -> Enrollment:
        return self._save(
            Enrollment(
                employee_id=employee.id,
                policy_id=self.policy().id,
                premium_amount=Decimal(premium),
                status=status.value,
            )
        )

    def claim(
        self,
        enrollment: Enrollment,
        amount: str | Decimal,
        status: ClaimStatus = ClaimStatus.PENDING,
    ) -> Claim:
        return self._save(
            Claim(
                enrollment_id=enrollment.id,
                amount=Decimal(amount),
                status=status.value,
            )
        )


@pytest.fixture
def seed(session) -> StoreSeeder:
    return StoreSeeder(session)
