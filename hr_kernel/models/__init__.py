"""Operational store models for the HR reporting kernel."""

from hr_kernel.models.claim import Claim, ClaimStatus
from hr_kernel.models.employee import Employee, EmployeeStatus
from hr_kernel.models.enrollment import Enrollment, EnrollmentStatus
from hr_kernel.models.organization import Organization
from hr_kernel.models.policy import InsurancePolicy

__all__ = [
    "Organization",
    "Employee",
    "EmployeeStatus",
    "InsurancePolicy",
    "Enrollment",
    "EnrollmentStatus",
    "Claim",
    "ClaimStatus",
]
