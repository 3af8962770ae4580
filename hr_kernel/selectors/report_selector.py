"""
Module: hr_kernel.selectors.report_selector
Responsibility: Grouped, set-based report aggregation over the operational
    store -- employee headcount and premium totals per organization, claim
    volume and approved amount per enrollment.
Architecture position: Kernel > Selectors.  May import from models/, domain/
    and selectors/base.py.  MUST NOT import from outer layers.

Invariants enforced:
    - Aggregation happens in SQL (GROUP BY with COUNT/SUM/CASE).  Entity rows
      are never loaded into Python to be summarized.
    - Completeness: every organization appears in organization-keyed reports
      and every enrollment in the claim summary, with zero-valued totals
      when nothing matches (outer joins).
    - Deterministic ordering: ascending by grouping key.
    - Currency totals are quantized to 2 places.

Failure modes:
    - DataAccessError if any query fails.  Never returns a partial or empty
      result in place of a failure.
    - A filter naming no organization returns an empty list; rejecting
      unknown ids is the caller's decision (see organization_exists()).
"""

from sqlalchemy import and_, case, func, select
from sqlalchemy.orm import Session

from hr_kernel.domain.report_rows import (
    ClaimSummaryRow,
    EmployeeCountRow,
    PremiumTotalRow,
)
from hr_kernel.domain.values import to_currency
from hr_kernel.logging_config import get_logger
from hr_kernel.models.claim import Claim, ClaimStatus
from hr_kernel.models.employee import Employee, EmployeeStatus
from hr_kernel.models.enrollment import Enrollment, EnrollmentStatus
from hr_kernel.models.organization import Organization
from hr_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.report")


class ReportSelector(BaseSelector):
    """
    Selector for the dashboard and export summaries.

    Contract:
        Each public method issues exactly one grouped query against the
        caller's session.  Running several methods on one session inside
        read_only_scope() yields mutually consistent results.

    Non-goals:
        - Does NOT validate organization filters (the reporting service
          normalizes and checks them).
        - Does NOT cache results; every call reads current data.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def organization_exists(self, organization_id: int) -> bool:
        """Return True if an organization with this id exists."""
        query = select(Organization.id).where(Organization.id == organization_id)
        return bool(self._fetch_all("organization_exists", query))

    def count_employees_by_organization(
        self,
        organization_id: int | None = None,
    ) -> list[EmployeeCountRow]:
        """
        Count current (active) employees per organization.

        Args:
            organization_id: Restrict to one organization.  None aggregates
                across all organizations.

        Returns:
            One EmployeeCountRow per organization, ascending by id.
            Organizations without active employees have employee_count 0.
        """
        employee_count = func.count(Employee.id)
        query = (
            select(
                Organization.id,
                Organization.name,
                employee_count.label("employee_count"),
            )
            .select_from(Organization)
            .outerjoin(
                Employee,
                and_(
                    Employee.organization_id == Organization.id,
                    Employee.status == EmployeeStatus.ACTIVE.value,
                ),
            )
            .group_by(Organization.id, Organization.name)
            .order_by(Organization.id)
        )
        if organization_id is not None:
            query = query.where(Organization.id == organization_id)

        rows = [
            EmployeeCountRow(
                organization_id=org_id,
                organization_name=name,
                employee_count=int(count),
            )
            for org_id, name, count in self._fetch_all(
                "count_employees_by_organization", query
            )
        ]

        logger.debug(
            "employee_counts_aggregated",
            extra={"organization_id": organization_id, "row_count": len(rows)},
        )
        return rows

    def sum_premium_by_organization(
        self,
        organization_id: int | None = None,
    ) -> list[PremiumTotalRow]:
        """
        Sum premium amounts of active enrollments per organization.

        Enrollments reach their organization through the enrolled employee.
        Terminated employees' enrollments still count while the enrollment
        itself is active.

        Args:
            organization_id: Restrict to one organization.  None aggregates
                across all organizations.

        Returns:
            One PremiumTotalRow per organization, ascending by id.
            Organizations without active enrollments total 0.00.
        """
        total_premium = func.coalesce(func.sum(Enrollment.premium_amount), 0)
        query = (
            select(
                Organization.id,
                Organization.name,
                total_premium.label("total_premium_collected"),
            )
            .select_from(Organization)
            .outerjoin(Employee, Employee.organization_id == Organization.id)
            .outerjoin(
                Enrollment,
                and_(
                    Enrollment.employee_id == Employee.id,
                    Enrollment.status == EnrollmentStatus.ACTIVE.value,
                ),
            )
            .group_by(Organization.id, Organization.name)
            .order_by(Organization.id)
        )
        if organization_id is not None:
            query = query.where(Organization.id == organization_id)

        rows = [
            PremiumTotalRow(
                organization_id=org_id,
                organization_name=name,
                total_premium_collected=to_currency(total),
            )
            for org_id, name, total in self._fetch_all(
                "sum_premium_by_organization", query
            )
        ]

        logger.debug(
            "premium_totals_aggregated",
            extra={"organization_id": organization_id, "row_count": len(rows)},
        )
        return rows

    def summarize_claims_by_enrollment(self) -> list[ClaimSummaryRow]:
        """
        Summarize claims per enrollment.

        total_claims counts every claim regardless of status.
        total_approved_amount sums only APPROVED claims; pending and rejected
        claims contribute to the count but not to the amount.

        Returns:
            One ClaimSummaryRow per enrollment, ascending by enrollment id.
            Enrollments without claims report 0 claims and 0.00.
        """
        approved_amount = case(
            (Claim.status == ClaimStatus.APPROVED.value, Claim.amount),
            else_=0,
        )
        query = (
            select(
                Enrollment.id,
                func.count(Claim.id).label("total_claims"),
                func.coalesce(func.sum(approved_amount), 0).label(
                    "total_approved_amount"
                ),
            )
            .select_from(Enrollment)
            .outerjoin(Claim, Claim.enrollment_id == Enrollment.id)
            .group_by(Enrollment.id)
            .order_by(Enrollment.id)
        )

        rows = [
            ClaimSummaryRow(
                enrollment_id=enrollment_id,
                total_claims=int(claim_count),
                total_approved_amount=to_currency(approved),
            )
            for enrollment_id, claim_count, approved in self._fetch_all(
                "summarize_claims_by_enrollment", query
            )
        ]

        logger.debug(
            "claim_summaries_aggregated",
            extra={"row_count": len(rows)},
        )
        return rows
