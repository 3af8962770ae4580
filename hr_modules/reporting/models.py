"""
Benefits Reporting Domain Models (``hr_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects returned by the reporting service: the three
report row contracts (re-exported from the kernel), the composite dashboard
result, and the export result envelope.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by
``ReportingService`` and the export renderers, returned to callers.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal`` with two places -- NEVER ``float``.
* Row sequences are tuples, so a dashboard cannot be mutated after it is
  built.

Failure modes
-------------
* Construction with invalid counts or amounts raises ``ValueError``.
* ``ExportFormat.parse`` raises ``UnsupportedExportFormatError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from hr_kernel.domain.report_rows import (
    ClaimSummaryRow,
    EmployeeCountRow,
    PremiumTotalRow,
)
from hr_kernel.domain.values import ZERO_CURRENCY
from hr_kernel.exceptions import UnsupportedExportFormatError

__all__ = [
    "ReportType",
    "ExportFormat",
    "EmployeeCountRow",
    "PremiumTotalRow",
    "ClaimSummaryRow",
    "DashboardReport",
    "ExportResult",
]


# =========================================================================
# Enums
# =========================================================================


class ReportType(str, Enum):
    """Report kinds produced by the reporting service."""

    EMPLOYEE_COUNTS = "employee_counts"
    PREMIUM_TOTALS = "premium_totals"
    CLAIM_SUMMARIES = "claim_summaries"
    DASHBOARD = "dashboard"


class ExportFormat(str, Enum):
    """Downloadable file formats for the employee-count report."""

    SPREADSHEET = "xlsx"
    DOCUMENT = "pdf"

    @classmethod
    def parse(cls, value: ExportFormat | str) -> ExportFormat:
        """
        Resolve a format from an enum member, its value or its name.

        Accepts "xlsx"/"pdf" and "spreadsheet"/"document", case-insensitive.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        raise UnsupportedExportFormatError(
            value, tuple(member.value for member in cls)
        )


# =========================================================================
# Dashboard
# =========================================================================


@dataclass(frozen=True)
class DashboardReport:
    """
    The three dashboard summaries, read from one consistent snapshot.

    ``claim_summaries`` is never filtered by organization.
    """

    employee_counts: tuple[EmployeeCountRow, ...]
    premium_totals: tuple[PremiumTotalRow, ...]
    claim_summaries: tuple[ClaimSummaryRow, ...]
    generated_at: str  # ISO format timestamp from injected clock
    organization_id: int | None = None

    @property
    def total_employees(self) -> int:
        return sum(row.employee_count for row in self.employee_counts)

    @property
    def total_premium_collected(self) -> Decimal:
        return sum(
            (row.total_premium_collected for row in self.premium_totals),
            ZERO_CURRENCY,
        )

    @property
    def total_claims(self) -> int:
        return sum(row.total_claims for row in self.claim_summaries)

    @property
    def total_approved_amount(self) -> Decimal:
        return sum(
            (row.total_approved_amount for row in self.claim_summaries),
            ZERO_CURRENCY,
        )


# =========================================================================
# Export
# =========================================================================


@dataclass(frozen=True)
class ExportResult:
    """A rendered export ready to be sent as a download."""

    content: bytes
    filename: str
    content_type: str
    format: ExportFormat
    row_count: int

    def __iter__(self):
        # Unpacks as (content, filename, content_type)
        return iter((self.content, self.filename, self.content_type))
