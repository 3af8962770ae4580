"""
Module: hr_kernel.models.enrollment
Responsibility: ORM persistence for enrollments -- an employee's registration
    under an insurance policy.  The enrollment is the unit of premium billing
    and of claim association.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - premium_amount is non-negative (ck_enrollment_premium_non_negative).
    - Only ACTIVE enrollments contribute to an organization's premium total.
    - The owning organization is reached through the employee.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_kernel.db.base import TrackedBase

if TYPE_CHECKING:
    from hr_kernel.models.claim import Claim
    from hr_kernel.models.employee import Employee
    from hr_kernel.models.policy import InsurancePolicy


class EnrollmentStatus(str, Enum):
    """Enrollment lifecycle status."""

    ACTIVE = "active"
    CANCELLED = "cancelled"


class Enrollment(TrackedBase):
    """An employee's enrollment under an insurance policy."""

    __tablename__ = "enrollments"

    __table_args__ = (
        CheckConstraint(
            "premium_amount >= 0",
            name="ck_enrollment_premium_non_negative",
        ),
        Index("idx_enrollment_employee", "employee_id"),
        Index("idx_enrollment_status", "status"),
    )

    employee_id: Mapped[int] = mapped_column(
        ForeignKey("employees.id"),
        nullable=False,
    )

    policy_id: Mapped[int] = mapped_column(
        ForeignKey("insurance_policies.id"),
        nullable=False,
    )

    # Periodic premium billed against this enrollment
    premium_amount: Mapped[Decimal] = mapped_column(
        nullable=False,
        default=Decimal("0.00"),
    )

    status: Mapped[EnrollmentStatus] = mapped_column(
        String(20),
        nullable=False,
        default=EnrollmentStatus.ACTIVE.value,
    )

    enrolled_on: Mapped[date | None] = mapped_column(nullable=True)

    employee: Mapped["Employee"] = relationship(
        back_populates="enrollments",
    )

    policy: Mapped["InsurancePolicy"] = relationship()

    claims: Mapped[list["Claim"]] = relationship(
        back_populates="enrollment",
    )

    def __repr__(self) -> str:
        return f"<Enrollment {self.id}: employee={self.employee_id} ({self.status})>"
