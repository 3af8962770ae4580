"""
Tests for reporting domain models.

Verifies immutability, row validation and format parsing.
NO database required.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from hr_kernel.domain import report_rows
from hr_kernel.exceptions import UnsupportedExportFormatError
from hr_modules.reporting.models import (
    ClaimSummaryRow,
    DashboardReport,
    EmployeeCountRow,
    ExportFormat,
    ExportResult,
    PremiumTotalRow,
    ReportType,
)


class TestRowContracts:
    """Tests for the three summary row shapes."""

    def test_rows_are_reexported_from_kernel(self):
        assert EmployeeCountRow is report_rows.EmployeeCountRow
        assert PremiumTotalRow is report_rows.PremiumTotalRow
        assert ClaimSummaryRow is report_rows.ClaimSummaryRow

    def test_employee_count_row_frozen(self):
        row = EmployeeCountRow(1, "Acme", 5)
        with pytest.raises(FrozenInstanceError):
            row.employee_count = 6  # type: ignore[misc]

    def test_rows_compare_by_value(self):
        assert EmployeeCountRow(1, "Acme", 5) == EmployeeCountRow(1, "Acme", 5)

    @pytest.mark.parametrize("count", [-1, True, 2.0, "3"])
    def test_invalid_employee_count_rejected(self, count):
        with pytest.raises(ValueError, match="employee_count"):
            EmployeeCountRow(1, "Acme", count)

    def test_zero_count_allowed(self):
        assert EmployeeCountRow(1, "Acme", 0).employee_count == 0

    def test_premium_row_requires_two_places(self):
        with pytest.raises(ValueError, match="2 decimal places"):
            PremiumTotalRow(1, "Acme", Decimal("10"))

    def test_premium_row_rejects_negative(self):
        with pytest.raises(ValueError, match="non-negative"):
            PremiumTotalRow(1, "Acme", Decimal("-1.00"))

    def test_premium_row_rejects_float(self):
        with pytest.raises(ValueError, match="Decimal"):
            PremiumTotalRow(1, "Acme", 10.0)

    def test_claim_summary_row(self):
        row = ClaimSummaryRow(7, 3, Decimal("150.00"))
        assert row.enrollment_id == 7
        assert row.total_claims == 3
        assert row.total_approved_amount == Decimal("150.00")

    def test_claim_summary_rejects_negative_count(self):
        with pytest.raises(ValueError, match="total_claims"):
            ClaimSummaryRow(7, -1, Decimal("0.00"))


class TestExportFormat:
    """Tests for ExportFormat parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("xlsx", ExportFormat.SPREADSHEET),
            ("XLSX", ExportFormat.SPREADSHEET),
            ("spreadsheet", ExportFormat.SPREADSHEET),
            (" pdf ", ExportFormat.DOCUMENT),
            ("Document", ExportFormat.DOCUMENT),
            (ExportFormat.DOCUMENT, ExportFormat.DOCUMENT),
        ],
    )
    def test_parse(self, value, expected):
        assert ExportFormat.parse(value) is expected

    @pytest.mark.parametrize("value", ["csv", "", None, 1])
    def test_parse_unknown(self, value):
        with pytest.raises(UnsupportedExportFormatError) as exc_info:
            ExportFormat.parse(value)
        assert exc_info.value.code == "UNSUPPORTED_EXPORT_FORMAT"

    def test_values(self):
        assert ExportFormat.SPREADSHEET.value == "xlsx"
        assert ExportFormat.DOCUMENT.value == "pdf"


class TestDashboardReport:
    """Tests for DashboardReport."""

    def _report(self) -> DashboardReport:
        return DashboardReport(
            employee_counts=(
                EmployeeCountRow(1, "Acme", 3),
                EmployeeCountRow(2, "Globex", 1),
            ),
            premium_totals=(
                PremiumTotalRow(1, "Acme", Decimal("500.50")),
                PremiumTotalRow(2, "Globex", Decimal("75.25")),
            ),
            claim_summaries=(
                ClaimSummaryRow(10, 3, Decimal("150.00")),
                ClaimSummaryRow(11, 0, Decimal("0.00")),
            ),
            generated_at="2024-01-01T12:00:00+00:00",
        )

    def test_totals(self):
        report = self._report()
        assert report.total_employees == 4
        assert report.total_premium_collected == Decimal("575.75")
        assert report.total_claims == 3
        assert report.total_approved_amount == Decimal("150.00")

    def test_empty_totals_are_zero(self):
        report = DashboardReport((), (), (), generated_at="2024-01-01T12:00:00+00:00")
        assert report.total_employees == 0
        assert report.total_premium_collected == Decimal("0.00")
        assert str(report.total_approved_amount) == "0.00"

    def test_frozen(self):
        report = self._report()
        with pytest.raises(FrozenInstanceError):
            report.organization_id = 5  # type: ignore[misc]


class TestExportResult:

    def test_unpacks_to_download_triple(self):
        result = ExportResult(
            content=b"%PDF-1.4",
            filename="employees_by_organization_2024-01-01.pdf",
            content_type="application/pdf",
            format=ExportFormat.DOCUMENT,
            row_count=0,
        )
        content, filename, content_type = result
        assert content == b"%PDF-1.4"
        assert filename.endswith(".pdf")
        assert content_type == "application/pdf"


def test_report_types():
    assert {t.value for t in ReportType} == {
        "employee_counts",
        "premium_totals",
        "claim_summaries",
        "dashboard",
    }
