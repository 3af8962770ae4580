"""Pure domain helpers: time abstraction and currency values."""

from hr_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from hr_kernel.domain.values import CURRENCY_QUANTUM, ZERO_CURRENCY, to_currency

__all__ = [
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "CURRENCY_QUANTUM",
    "ZERO_CURRENCY",
    "to_currency",
]
