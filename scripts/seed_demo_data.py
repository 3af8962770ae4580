#!/usr/bin/env python3
"""
Seed a database with a small benefits-administration data set.

Drops and recreates all tables, then inserts organizations, employees,
policies, enrollments and claims, including an organization with no
employees and an enrollment with no claims so zero rows show up in reports.

Usage:
    python3 scripts/seed_demo_data.py
    python3 scripts/seed_demo_data.py --database-url postgresql://hr:hr@localhost/hr
"""

import argparse
import os
import sys
from datetime import date
from decimal import Decimal

DEFAULT_DB_URL = "sqlite:///hr_reports_demo.db"

ORGANIZATIONS = ("Acme Manufacturing", "Globex Logistics", "Initech Services")

# (organization index, full name, status)
EMPLOYEES = (
    (0, "Alice Moreno", "active"),
    (0, "Bilal Haddad", "active"),
    (0, "Chen Wei", "terminated"),
    (1, "Dana Kowalski", "active"),
)

POLICIES = (
    ("MED-STD", "Standard Medical"),
    ("DEN-BAS", "Basic Dental"),
)

# (employee index, policy index, premium, status)
ENROLLMENTS = (
    (0, 0, Decimal("320.00"), "active"),
    (0, 1, Decimal("45.50"), "active"),
    (1, 0, Decimal("320.00"), "active"),
    (2, 0, Decimal("320.00"), "cancelled"),
    (3, 1, Decimal("45.50"), "active"),
)

# (enrollment index, amount, status)
CLAIMS = (
    (0, Decimal("100.00"), "approved"),
    (0, Decimal("50.00"), "approved"),
    (0, Decimal("75.00"), "rejected"),
    (2, Decimal("410.25"), "pending"),
    (4, Decimal("88.10"), "approved"),
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed demo reporting data.")
    parser.add_argument(
        "--database-url",
        default=os.environ.get("DATABASE_URL", DEFAULT_DB_URL),
        help="SQLAlchemy database URL (default: $DATABASE_URL or local SQLite demo file).",
    )
    args = parser.parse_args(argv)

    from hr_kernel.db.engine import (
        create_tables,
        drop_tables,
        init_engine_from_url,
        session_scope,
    )
    from hr_kernel.models import Claim, Employee, Enrollment, InsurancePolicy, Organization

    init_engine_from_url(args.database_url)
    drop_tables()
    create_tables()

    with session_scope() as session:
        orgs = [Organization(name=name) for name in ORGANIZATIONS]
        session.add_all(orgs)

        employees = [
            Employee(
                organization=orgs[org_idx],
                full_name=name,
                status=status,
                hired_on=date(2023, 1, 9),
            )
            for org_idx, name, status in EMPLOYEES
        ]
        session.add_all(employees)

        policies = [InsurancePolicy(code=code, name=name) for code, name in POLICIES]
        session.add_all(policies)

        enrollments = [
            Enrollment(
                employee=employees[emp_idx],
                policy=policies[pol_idx],
                premium_amount=premium,
                status=status,
                enrolled_on=date(2024, 1, 1),
            )
            for emp_idx, pol_idx, premium, status in ENROLLMENTS
        ]
        session.add_all(enrollments)

        session.add_all(
            Claim(
                enrollment=enrollments[enr_idx],
                amount=amount,
                status=status,
                filed_on=date(2024, 6, 1),
            )
            for enr_idx, amount, status in CLAIMS
        )

    print(
        f"  Seeded {len(ORGANIZATIONS)} organizations, {len(EMPLOYEES)} employees, "
        f"{len(ENROLLMENTS)} enrollments, {len(CLAIMS)} claims"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
