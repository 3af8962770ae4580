"""
ORM tests for the operational store models.

Covers defaults, relationships and the non-negative amount constraints.
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from hr_kernel.models import (
    Claim,
    ClaimStatus,
    Employee,
    EmployeeStatus,
    Enrollment,
    EnrollmentStatus,
    Organization,
)


class TestDefaults:

    def test_employee_defaults_to_active(self, session, seed):
        org = seed.organization("Acme")
        emp = Employee(organization_id=org.id, full_name="Ada")
        session.add(emp)
        session.commit()

        assert emp.status == EmployeeStatus.ACTIVE.value
        assert emp.is_active is True
        assert emp.created_at is not None

    def test_enrollment_and_claim_defaults(self, session, seed):
        emp = seed.employee(seed.organization("Acme"))
        enrollment = Enrollment(employee_id=emp.id, policy_id=seed.policy().id)
        session.add(enrollment)
        session.commit()
        claim = Claim(enrollment_id=enrollment.id, amount=Decimal("12.50"))
        session.add(claim)
        session.commit()

        assert enrollment.status == EnrollmentStatus.ACTIVE.value
        assert enrollment.premium_amount == Decimal("0.00")
        assert claim.status == ClaimStatus.PENDING.value

    def test_terminated_employee_is_not_active(self, seed):
        emp = seed.employee(seed.organization("Acme"), EmployeeStatus.TERMINATED)
        assert emp.is_active is False


class TestRelationships:

    def test_organization_employees(self, session, seed):
        org = seed.organization("Acme")
        seed.employees(org, 2)
        session.refresh(org)

        assert len(org.employees) == 2
        assert all(e.organization is org for e in org.employees)

    def test_enrollment_claims(self, session, seed):
        enrollment = seed.enrollment(seed.employee(seed.organization("Acme")), "10.00")
        seed.claim(enrollment, "1.00")
        seed.claim(enrollment, "2.00")
        session.refresh(enrollment)

        assert sorted(c.amount for c in enrollment.claims) == [
            Decimal("1.00"),
            Decimal("2.00"),
        ]
        assert enrollment.employee.organization.name == "Acme"


class TestConstraints:

    def test_negative_premium_rejected(self, session, seed):
        emp = seed.employee(seed.organization("Acme"))
        session.add(
            Enrollment(
                employee_id=emp.id,
                policy_id=seed.policy().id,
                premium_amount=Decimal("-1.00"),
            )
        )
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_negative_claim_rejected(self, session, seed):
        enrollment = seed.enrollment(seed.employee(seed.organization("Acme")))
        session.add(Claim(enrollment_id=enrollment.id, amount=Decimal("-0.01")))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_organization_names_unique(self, session, seed):
        seed.organization("Acme")
        session.add(Organization(name="Acme"))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()
