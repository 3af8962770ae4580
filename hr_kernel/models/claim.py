"""
Module: hr_kernel.models.claim
Responsibility: ORM persistence for claims -- reimbursement requests tied to
    an enrollment.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - amount is non-negative (ck_claim_amount_non_negative).
    - Every claim counts toward its enrollment's claim total; only APPROVED
      claims count toward the approved amount.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_kernel.db.base import TrackedBase

if TYPE_CHECKING:
    from hr_kernel.models.enrollment import Enrollment


class ClaimStatus(str, Enum):
    """Claim adjudication status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Claim(TrackedBase):
    """A reimbursement claim filed against an enrollment."""

    __tablename__ = "claims"

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_claim_amount_non_negative"),
        Index("idx_claim_enrollment", "enrollment_id"),
        Index("idx_claim_status", "status"),
    )

    enrollment_id: Mapped[int] = mapped_column(
        ForeignKey("enrollments.id"),
        nullable=False,
    )

    amount: Mapped[Decimal] = mapped_column(nullable=False)

    status: Mapped[ClaimStatus] = mapped_column(
        String(20),
        nullable=False,
        default=ClaimStatus.PENDING.value,
    )

    filed_on: Mapped[date | None] = mapped_column(nullable=True)

    enrollment: Mapped["Enrollment"] = relationship(
        back_populates="claims",
    )

    def __repr__(self) -> str:
        return f"<Claim {self.id}: {self.amount} ({self.status})>"
