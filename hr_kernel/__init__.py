"""
HR Reporting Kernel

Read-side core of the benefits administration application:
- Operational store models (organizations, employees, enrollments, claims)
- Grouped, set-based report aggregation
- Snapshot-consistent read-only transactional scopes
- Typed errors and structured logging
"""

__version__ = "0.1.0"
