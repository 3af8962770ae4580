"""
Structured logging of report generation.

Checks the JSON lines emitted while dashboards and exports are built: the
bound report context, the event extras, and how failures are described.
"""

import json
import logging
import sys
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from hr_kernel.exceptions import DataAccessError, OrganizationNotFoundError
from hr_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)
from hr_kernel.selectors.report_selector import ReportSelector
from hr_modules.reporting.models import ExportFormat
from hr_modules.reporting.service import ReportingService


def _events(records, name):
    return [r for r in records if r["message"] == name]


@pytest.fixture
def service(session_factory, deterministic_clock) -> ReportingService:
    return ReportingService(session_factory=session_factory, clock=deterministic_clock)


@pytest.fixture
def acme(seed):
    org = seed.organization("Acme")
    first, _ = seed.employees(org, 2)
    seed.enrollment(first, "120.00")
    return org


class TestReportEvents:

    def test_dashboard_generated_carries_filter(self, service, acme, captured_logs):
        service.dashboard(acme.id)

        [record] = _events(captured_logs(), "dashboard_generated")
        assert record["level"] == "INFO"
        assert record["logger"] == "hr_kernel.modules.reporting.service"
        assert record["report_type"] == "dashboard"
        assert record["organization_id"] == str(acme.id)
        assert record["total_employees"] == 2
        assert record["total_premium_collected"] == "120.00"

    def test_unfiltered_dashboard_has_no_organization_id(self, service, acme, captured_logs):
        service.dashboard()

        [record] = _events(captured_logs(), "dashboard_generated")
        assert record["report_type"] == "dashboard"
        assert "organization_id" not in record

    @pytest.mark.parametrize("fmt", ["xlsx", "pdf"])
    def test_export_rendered_inherits_report_type(self, service, acme, captured_logs, fmt):
        result = service.export(fmt)

        [record] = _events(captured_logs(), "export_rendered")
        assert record["report_type"] == "employee_counts"
        assert record["format"] == fmt
        assert record["row_count"] == 1
        assert record["byte_count"] == len(result.content)

    def test_aggregation_failed_keeps_bound_context(self, empty_engine, captured_logs):
        with LogContext.bind(report_type="dashboard", organization_id=7):
            with Session(bind=empty_engine) as broken:
                with pytest.raises(DataAccessError):
                    ReportSelector(broken).sum_premium_by_organization(7)

        [record] = _events(captured_logs(), "aggregation_failed")
        assert record["level"] == "ERROR"
        assert record["operation"] == "sum_premium_by_organization"
        assert record["report_type"] == "dashboard"
        assert record["organization_id"] == "7"
        assert record["error"]["type"] == "OperationalError"
        assert "Traceback" in record["traceback"]

    def test_failed_dashboard_restores_context(self, service, captured_logs):
        with pytest.raises(OrganizationNotFoundError):
            service.dashboard(42)

        [record] = _events(captured_logs(), "organization_filter_not_found")
        assert record["organization_id"] == "42"
        assert LogContext.current() == {}


class TestLogContext:

    def test_bindings_nest_and_restore(self):
        with LogContext.bind(report_type="dashboard"):
            with LogContext.bind(organization_id=3):
                assert LogContext.current() == {
                    "report_type": "dashboard",
                    "organization_id": "3",
                }
            assert LogContext.current() == {"report_type": "dashboard"}
        assert LogContext.current() == {}

    def test_none_leaves_field_unbound(self):
        with LogContext.bind(report_type="employee_counts", organization_id=None):
            assert LogContext.current() == {"report_type": "employee_counts"}

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError, match="actor_id"):
            with LogContext.bind(actor_id="u-1"):
                pass


class TestStructuredFormatter:

    def _format(self, message, extra=None, exc_info=None) -> dict:
        record = logging.LogRecord(
            "hr_kernel.test", logging.ERROR, __file__, 1, message, (), exc_info
        )
        for key, value in (extra or {}).items():
            setattr(record, key, value)
        return json.loads(StructuredFormatter().format(record))

    def test_report_values_serialized(self):
        payload = self._format(
            "export_completed",
            {"total_premium_collected": Decimal("575.75"), "format": ExportFormat.DOCUMENT},
        )

        assert payload["total_premium_collected"] == "575.75"
        assert payload["format"] == "pdf"

    def test_kernel_error_described(self):
        try:
            raise DataAccessError("count_employees_by_organization", "no such table")
        except DataAccessError:
            payload = self._format("aggregation_failed", exc_info=sys.exc_info())

        assert payload["error"]["type"] == "DataAccessError"
        assert payload["error"]["code"] == "DATA_ACCESS_ERROR"
        assert payload["error"]["fields"] == {
            "operation": "count_employees_by_organization",
            "detail": "no such table",
        }

    def test_extras_do_not_override_envelope(self):
        payload = self._format("export_rendered", {"level": "shadowed"})

        assert payload["level"] == "ERROR"


class TestConfigureLogging:

    @pytest.fixture
    def fresh_logging(self):
        reset_logging()
        yield logging.getLogger("hr_kernel")
        reset_logging()
        configure_logging(level=logging.DEBUG)

    def test_second_call_keeps_first_handler(self, fresh_logging):
        first = logging.NullHandler()

        configure_logging(handler=first)
        configure_logging(handler=logging.NullHandler())

        assert fresh_logging.handlers == [first]
        assert isinstance(first.formatter, StructuredFormatter)
        assert fresh_logging.propagate is False

    def test_module_loggers_under_namespace(self):
        logger = get_logger("modules.reporting.exporters")

        assert logger.name == "hr_kernel.modules.reporting.exporters"
        ancestors = []
        current = logger.parent
        while current is not None:
            ancestors.append(current.name)
            current = current.parent
        assert "hr_kernel" in ancestors
