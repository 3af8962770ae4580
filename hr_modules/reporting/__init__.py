"""
Benefits Reporting Module (``hr_modules.reporting``).

Responsibility
--------------
Read-only module that summarizes the operational store for dashboards and
downloads: employee headcount and premium totals per organization, claim
volume and approved amounts per enrollment, and spreadsheet / PDF exports
of the employee-count report.

Architecture position
---------------------
**Modules layer** -- glue between the kernel's ``ReportSelector`` and the
export renderers.  Page controllers call ``ReportingService`` only.

Invariants enforced
-------------------
* No writes to the operational store (read-only guarantee).
* Every report is computed fresh per call; nothing is cached or persisted.

Failure modes
-------------
* ``ValidationError`` -- malformed filter or unknown export format.
* ``DataAccessError`` -- the store could not answer.
* ``ExportGenerationError`` -- a file could not be produced.
"""

from hr_modules.reporting.config import ReportingConfig
from hr_modules.reporting.exporters import (
    RENDERERS,
    DocumentRenderer,
    ReportRenderer,
    SpreadsheetRenderer,
    get_renderer,
)
from hr_modules.reporting.models import (
    ClaimSummaryRow,
    DashboardReport,
    EmployeeCountRow,
    ExportFormat,
    ExportResult,
    PremiumTotalRow,
    ReportType,
)
from hr_modules.reporting.service import ReportingService, normalize_organization_filter

__all__ = [
    # Service
    "ReportingService",
    "normalize_organization_filter",
    # Config
    "ReportingConfig",
    # Models
    "ReportType",
    "ExportFormat",
    "EmployeeCountRow",
    "PremiumTotalRow",
    "ClaimSummaryRow",
    "DashboardReport",
    "ExportResult",
    # Renderers
    "ReportRenderer",
    "SpreadsheetRenderer",
    "DocumentRenderer",
    "RENDERERS",
    "get_renderer",
]
