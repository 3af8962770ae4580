"""
Typed Exception Hierarchy for the HR Reporting Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Report callers (page controllers, download endpoints, the export CLI) must
tell apart three very different situations:

  - the request itself was malformed       -> ValidationError
  - the operational store could not answer -> DataAccessError
  - the file could not be produced         -> ExportGenerationError

Parsing exception messages to make that distinction is fragile, so every
failure raised by this package is a TYPED exception carrying:
  1. a CODE class attribute (machine-readable, API-safe)
  2. structured DATA as instance attributes (not just a message string)

Example - WRONG way to handle errors:
    try:
        result = service.export("xlsx")
    except Exception as e:
        if "connection" in str(e):  # FRAGILE - message might change
            show_maintenance_page()

Example - RIGHT way (what this module enables):
    try:
        result = service.export("xlsx")
    except DataAccessError as e:
        show_maintenance_page(code=e.code)
    except ExportGenerationError as e:
        show_bad_data_page(code=e.code, report=e.report_format)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from HRKernelError:

    HRKernelError (base)
    |
    +-- ValidationError
    |   +-- InvalidOrganizationFilterError
    |   +-- OrganizationNotFoundError
    |   +-- UnsupportedExportFormatError
    |
    +-- DataAccessError
    |
    +-- ExportGenerationError
        +-- ExportRowLimitExceededError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category    | Code                          | When Raised
------------|-------------------------------|-----------------------------------
Validation  | VALIDATION_ERROR              | Generic malformed request
            | INVALID_ORGANIZATION_FILTER   | Filter is not a positive integer
            | ORGANIZATION_NOT_FOUND        | Filter names no organization
            | UNSUPPORTED_EXPORT_FORMAT     | Unknown export format requested
------------|-------------------------------|-----------------------------------
Data access | DATA_ACCESS_ERROR             | Store unreachable / query failed
------------|-------------------------------|-----------------------------------
Export      | EXPORT_GENERATION_ERROR       | Renderer could not build payload
            | EXPORT_ROW_LIMIT_EXCEEDED     | Row count above the safety bound

===============================================================================
DESIGN DECISIONS
===============================================================================

1. The kernel never catches-and-swallows.  Store and renderer faults are
   re-raised as the typed exceptions above with the original exception
   chained (``raise ... from exc``).

2. No retries happen here.  Retry policy belongs to the surrounding service
   layer, which can catch DataAccessError by type.

3. Translation into HTTP status codes, redirects or flash messages is the
   caller's job.  These exceptions carry no presentation concerns.

===============================================================================
"""


class HRKernelError(Exception):
    """
    Base exception for all HR reporting kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "HR_KERNEL_ERROR"


# Validation exceptions


class ValidationError(HRKernelError):
    """Caller supplied a request that cannot be served as given."""

    code: str = "VALIDATION_ERROR"


class InvalidOrganizationFilterError(ValidationError):
    """Organization filter has the wrong shape (not a positive integer id)."""

    code: str = "INVALID_ORGANIZATION_FILTER"

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Invalid organization filter {value!r}: expected a positive integer id"
        )


class OrganizationNotFoundError(ValidationError):
    """Organization filter is well-formed but matches no organization."""

    code: str = "ORGANIZATION_NOT_FOUND"

    def __init__(self, organization_id: int):
        self.organization_id = organization_id
        super().__init__(f"Organization not found: {organization_id}")


class UnsupportedExportFormatError(ValidationError):
    """Requested export format has no registered renderer."""

    code: str = "UNSUPPORTED_EXPORT_FORMAT"

    def __init__(self, requested: object, supported: tuple[str, ...]):
        self.requested = requested
        self.supported = supported
        super().__init__(
            f"Unsupported export format {requested!r}; "
            f"expected one of {', '.join(supported)}"
        )


# Data access exceptions


class DataAccessError(HRKernelError):
    """
    Aggregation could not complete against the operational store.

    Never used to signal "no data": an empty result is returned as an
    empty sequence, an unreachable store always raises.
    """

    code: str = "DATA_ACCESS_ERROR"

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Data access failed during {operation}: {detail}")


# Export exceptions


class ExportGenerationError(HRKernelError):
    """A renderer failed to produce a valid payload from the report rows."""

    code: str = "EXPORT_GENERATION_ERROR"

    def __init__(self, report_format: str, detail: str):
        self.report_format = report_format
        self.detail = detail
        super().__init__(f"Failed to generate {report_format} export: {detail}")


class ExportRowLimitExceededError(ExportGenerationError):
    """Row count exceeds the configured export safety bound."""

    code: str = "EXPORT_ROW_LIMIT_EXCEEDED"

    def __init__(self, report_format: str, row_count: int, max_rows: int):
        self.row_count = row_count
        self.max_rows = max_rows
        super().__init__(
            report_format,
            f"{row_count} rows exceeds the export limit of {max_rows}",
        )
