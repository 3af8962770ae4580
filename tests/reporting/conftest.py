"""
Reporting-specific test fixtures.

Provides:
- ReportingService instances wired to the per-test SQLite store
- Row factory for renderer tests (no DB required)
- A counting session factory for transactional-scope assertions
"""

import pytest

from hr_modules.reporting.config import ReportingConfig
from hr_modules.reporting.models import EmployeeCountRow
from hr_modules.reporting.service import ReportingService


@pytest.fixture
def reporting_config() -> ReportingConfig:
    """Reporting configuration with uncompressed PDFs so tests can read them."""
    return ReportingConfig(pdf_compress=False)


@pytest.fixture
def reporting_service(
    session_factory,
    deterministic_clock,
    reporting_config,
) -> ReportingService:
    """ReportingService wired to the test store."""
    return ReportingService(
        session_factory=session_factory,
        clock=deterministic_clock,
        config=reporting_config,
    )


class CountingSessionFactory:
    """Wraps a sessionmaker and records how many sessions were opened."""

    def __init__(self, factory):
        self._factory = factory
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self._factory()


@pytest.fixture
def counting_factory(session_factory) -> CountingSessionFactory:
    return CountingSessionFactory(session_factory)


def _make_rows(count: int) -> list[EmployeeCountRow]:
    return [
        EmployeeCountRow(
            organization_id=count - i,
            organization_name=f"Organization {count - i}",
            employee_count=(i * 7) % 13,
        )
        for i in range(count)
    ]


@pytest.fixture
def make_rows():
    """Factory for synthetic employee-count rows, ids descending to catch re-sorting."""
    return _make_rows
