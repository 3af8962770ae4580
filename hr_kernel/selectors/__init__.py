"""Read-only selectors over the operational store."""

from hr_kernel.selectors.base import BaseSelector
from hr_kernel.selectors.report_selector import ReportSelector

__all__ = [
    "BaseSelector",
    "ReportSelector",
]
