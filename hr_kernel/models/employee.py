"""
Module: hr_kernel.models.employee
Responsibility: ORM persistence for employees of an organization.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - An employee belongs to exactly one organization.
    - Only ACTIVE employees count as an organization's current headcount.
"""

from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_kernel.db.base import TrackedBase

if TYPE_CHECKING:
    from hr_kernel.models.enrollment import Enrollment
    from hr_kernel.models.organization import Organization


class EmployeeStatus(str, Enum):
    """Employment status."""

    ACTIVE = "active"
    TERMINATED = "terminated"


class Employee(TrackedBase):
    """An employee registered under an organization."""

    __tablename__ = "employees"

    __table_args__ = (
        Index("idx_employee_organization", "organization_id"),
        Index("idx_employee_status", "status"),
    )

    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id"),
        nullable=False,
    )

    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    status: Mapped[EmployeeStatus] = mapped_column(
        String(20),
        nullable=False,
        default=EmployeeStatus.ACTIVE.value,
    )

    hired_on: Mapped[date | None] = mapped_column(nullable=True)

    organization: Mapped["Organization"] = relationship(
        back_populates="employees",
    )

    enrollments: Mapped[list["Enrollment"]] = relationship(
        back_populates="employee",
    )

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE.value

    def __repr__(self) -> str:
        return f"<Employee {self.id}: {self.full_name} ({self.status})>"
