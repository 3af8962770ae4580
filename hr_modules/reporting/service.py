"""
Reporting Module Service (``hr_modules.reporting.service``).

Responsibility
--------------
Single entry point for page controllers and download endpoints.  Combines
the aggregation selector with the export renderers:

* **Dashboard mode** -- the three summaries (employee counts, premium
  totals, claim summaries) read in ONE read-only transaction.
* **Export mode** -- the unfiltered employee-count report rendered to a
  spreadsheet or a paginated document.

Architecture position
---------------------
**Modules layer** -- thin glue.  Opens read-only scopes through
``hr_kernel.db.engine.read_only_scope`` and delegates all aggregation to
``ReportSelector`` and all serialization to ``exporters``.
Constructor: ``session_factory`` + ``clock`` + ``config``.

Invariants enforced
-------------------
* Read-only -- no mutations to the operational store.
* Snapshot consistency -- every query serving one call shares one
  transaction.
* Stateless -- nothing is cached or persisted between calls.

Failure modes
-------------
* Malformed or unknown organization filter -> ``ValidationError`` subclass,
  raised before aggregation.
* Unknown export format -> ``UnsupportedExportFormatError``, raised before
  the store is touched.
* Store failure -> ``DataAccessError`` propagates.
* Renderer failure -> ``ExportGenerationError`` propagates.
"""

from __future__ import annotations

from typing import Callable

from sqlalchemy.orm import Session

from hr_kernel.db.engine import read_only_scope
from hr_kernel.domain.clock import Clock, SystemClock
from hr_kernel.exceptions import InvalidOrganizationFilterError, OrganizationNotFoundError
from hr_kernel.logging_config import LogContext, get_logger
from hr_kernel.selectors.report_selector import ReportSelector

from hr_modules.reporting.config import ReportingConfig
from hr_modules.reporting.exporters import get_renderer
from hr_modules.reporting.models import (
    ClaimSummaryRow,
    DashboardReport,
    EmployeeCountRow,
    ExportFormat,
    ExportResult,
    PremiumTotalRow,
    ReportType,
)

logger = get_logger("modules.reporting.service")

# Organization ids are 32-bit INTEGER primary keys.
MAX_ORGANIZATION_ID = 2**31 - 1


def normalize_organization_filter(value: object) -> int | None:
    """
    Normalize a caller-supplied organization filter.

    ``None`` and blank strings mean "no filter".  Integers and strings of
    ASCII digits in 1..MAX_ORGANIZATION_ID are accepted.  Everything else
    is rejected, including non-ASCII digits (superscripts, full-width)
    and ids too large for the store to compare against.

    Raises:
        InvalidOrganizationFilterError: The value has the wrong shape.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidOrganizationFilterError(value)
    if isinstance(value, int):
        organization_id = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if not (text.isascii() and text.isdigit()):
            raise InvalidOrganizationFilterError(value)
        organization_id = int(text)
    else:
        raise InvalidOrganizationFilterError(value)
    if not 1 <= organization_id <= MAX_ORGANIZATION_ID:
        raise InvalidOrganizationFilterError(value)
    return organization_id


class ReportingService:
    """
    Dashboard and export orchestration.

    Contract
    --------
    * ``dashboard()`` returns a ``DashboardReport``.
    * ``export()`` returns an ``ExportResult`` (bytes, filename, content type).
    * All methods are **read-only**.

    Guarantees
    ----------
    * Each call opens its own read-only scope; calls share no mutable state,
      so one instance may serve concurrent requests.
    * Clock is injectable for deterministic timestamps and filenames.

    Non-goals
    ---------
    * Does NOT retry failed calls.
    * Does NOT translate errors into HTTP responses or user messages.
    * Does NOT cache or persist generated reports.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._session_factory = session_factory
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()

        logger.info(
            "reporting_service_initialized",
            extra={"max_export_rows": self._config.max_export_rows},
        )

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _resolve_filter(
        self,
        selector: ReportSelector,
        organization_id: int | None,
    ) -> None:
        """Reject a well-formed filter that names no organization."""
        if organization_id is not None and not selector.organization_exists(
            organization_id
        ):
            logger.warning(
                "organization_filter_not_found",
                extra={"organization_id": organization_id},
            )
            raise OrganizationNotFoundError(organization_id)

    # =========================================================================
    # Public API
    # =========================================================================

    def dashboard(self, organization_id: object = None) -> DashboardReport:
        """
        Build the dashboard summaries from one consistent snapshot.

        Args:
            organization_id: Optional organization filter applied to the
                employee-count and premium summaries.  Claim summaries always
                cover every enrollment.

        Raises:
            InvalidOrganizationFilterError: Malformed filter.
            OrganizationNotFoundError: Filter names no organization.
            DataAccessError: Store failure.
        """
        org_id = normalize_organization_filter(organization_id)

        with LogContext.bind(
            report_type=ReportType.DASHBOARD.value,
            organization_id=org_id,
        ):
            with read_only_scope(self._session_factory) as session:
                selector = ReportSelector(session)
                self._resolve_filter(selector, org_id)
                employee_counts = selector.count_employees_by_organization(org_id)
                premium_totals = selector.sum_premium_by_organization(org_id)
                claim_summaries = selector.summarize_claims_by_enrollment()

            report = DashboardReport(
                employee_counts=tuple(employee_counts),
                premium_totals=tuple(premium_totals),
                claim_summaries=tuple(claim_summaries),
                generated_at=self._clock.now().isoformat(),
                organization_id=org_id,
            )

            logger.info(
                "dashboard_generated",
                extra={
                    "organization_count": len(report.employee_counts),
                    "enrollment_count": len(report.claim_summaries),
                    "total_employees": report.total_employees,
                    "total_premium_collected": report.total_premium_collected,
                },
            )
        return report

    def export(self, export_format: ExportFormat | str) -> ExportResult:
        """
        Render the full, unfiltered employee-count report.

        Args:
            export_format: ``ExportFormat`` member or its string form
                ("xlsx", "pdf", "spreadsheet", "document").

        Raises:
            UnsupportedExportFormatError: Unknown format.
            DataAccessError: Store failure.
            ExportGenerationError: Renderer failure or row limit exceeded.
        """
        fmt = ExportFormat.parse(export_format)
        generated_at = self._clock.now()

        with LogContext.bind(report_type=ReportType.EMPLOYEE_COUNTS.value):
            with read_only_scope(self._session_factory) as session:
                rows = ReportSelector(session).count_employees_by_organization(None)

            renderer = get_renderer(fmt, config=self._config, generated_at=generated_at)
            content = renderer.render(rows)

            filename = (
                f"{self._config.filename_prefix}_"
                f"{generated_at.strftime('%Y-%m-%d')}{renderer.file_extension}"
            )
            logger.info(
                "export_completed",
                extra={
                    "format": fmt.value,
                    "export_filename": filename,
                    "row_count": len(rows),
                },
            )

        return ExportResult(
            content=content,
            filename=filename,
            content_type=renderer.content_type,
            format=fmt,
            row_count=len(rows),
        )

    def employee_counts(self, organization_id: object = None) -> tuple[EmployeeCountRow, ...]:
        """Employee counts per organization, in their own read-only scope."""
        org_id = normalize_organization_filter(organization_id)
        with read_only_scope(self._session_factory) as session:
            selector = ReportSelector(session)
            self._resolve_filter(selector, org_id)
            return tuple(selector.count_employees_by_organization(org_id))

    def premium_totals(self, organization_id: object = None) -> tuple[PremiumTotalRow, ...]:
        """Premium totals per organization, in their own read-only scope."""
        org_id = normalize_organization_filter(organization_id)
        with read_only_scope(self._session_factory) as session:
            selector = ReportSelector(session)
            self._resolve_filter(selector, org_id)
            return tuple(selector.sum_premium_by_organization(org_id))

    def claim_summaries(self) -> tuple[ClaimSummaryRow, ...]:
        """Claim summaries per enrollment, in their own read-only scope."""
        with read_only_scope(self._session_factory) as session:
            return tuple(ReportSelector(session).summarize_claims_by_enrollment())
