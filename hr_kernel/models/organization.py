"""
Module: hr_kernel.models.organization
Responsibility: ORM persistence for organizations -- the tenant entities that
    own employees and, through them, enrollments.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - name is unique (uq_organization_name).
    - Every report keyed by organization enumerates ALL rows of this table,
      including organizations with no employees or enrollments.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_kernel.db.base import TrackedBase

if TYPE_CHECKING:
    from hr_kernel.models.employee import Employee


class Organization(TrackedBase):
    """Tenant organization owning employees and enrollments."""

    __tablename__ = "organizations"

    __table_args__ = (
        UniqueConstraint("name", name="uq_organization_name"),
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    employees: Mapped[list["Employee"]] = relationship(
        back_populates="organization",
    )

    def __repr__(self) -> str:
        return f"<Organization {self.id}: {self.name}>"
