"""
Module: hr_kernel.models.policy
Responsibility: ORM persistence for the insurance policies employees enroll in.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hr_kernel.db.base import TrackedBase


class InsurancePolicy(TrackedBase):
    """An insurance product offered to employees."""

    __tablename__ = "insurance_policies"

    __table_args__ = (
        UniqueConstraint("code", name="uq_insurance_policy_code"),
    )

    code: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<InsurancePolicy {self.code}>"
