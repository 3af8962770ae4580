"""
Report row contracts.

Responsibility:
    The three immutable summary shapes produced by the aggregation selector
    and consumed by dashboards and export renderers.

Architecture position:
    Kernel > Domain -- pure data definitions with ZERO I/O.  Lives in the
    kernel so selectors can build rows without importing the reporting
    module; ``hr_modules.reporting.models`` re-exports them.

Invariants enforced:
    - All rows are ``frozen=True`` (immutable after construction).
    - Counts are non-negative integers; totals are non-negative ``Decimal``
      with exactly two fractional digits.  Violations raise ``ValueError``
      at construction, so an invalid row can never reach a renderer.
"""

from dataclasses import dataclass
from decimal import Decimal

from hr_kernel.domain.values import CURRENCY_QUANTUM


def _require_count(field_name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{field_name} cannot be negative: {value}")


def _require_currency(field_name: str, value: object) -> None:
    if not isinstance(value, Decimal):
        raise ValueError(f"{field_name} must be a Decimal, got {value!r}")
    if not value.is_finite() or value < 0:
        raise ValueError(f"{field_name} must be a non-negative amount: {value}")
    if value.as_tuple().exponent != CURRENCY_QUANTUM.as_tuple().exponent:
        raise ValueError(f"{field_name} must carry exactly 2 decimal places: {value}")


@dataclass(frozen=True)
class EmployeeCountRow:
    """Current headcount of one organization."""

    organization_id: int
    organization_name: str
    employee_count: int

    def __post_init__(self):
        _require_count("organization_id", self.organization_id)
        _require_count("employee_count", self.employee_count)


@dataclass(frozen=True)
class PremiumTotalRow:
    """Premium collected across one organization's active enrollments."""

    organization_id: int
    organization_name: str
    total_premium_collected: Decimal

    def __post_init__(self):
        _require_count("organization_id", self.organization_id)
        _require_currency("total_premium_collected", self.total_premium_collected)


@dataclass(frozen=True)
class ClaimSummaryRow:
    """Claim volume and approved amount of one enrollment."""

    enrollment_id: int
    total_claims: int
    total_approved_amount: Decimal

    def __post_init__(self):
        _require_count("enrollment_id", self.enrollment_id)
        _require_count("total_claims", self.total_claims)
        _require_currency("total_approved_amount", self.total_approved_amount)
