"""
Currency values.

All monetary totals in report rows carry exactly two fractional digits.
Aggregates coming back from the database may arrive as ``Decimal``, ``int``,
``float`` (SQLite SUM) or ``None`` (SUM over no rows); ``to_currency``
normalizes all of them.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CURRENCY_QUANTUM = Decimal("0.01")
ZERO_CURRENCY = Decimal("0.00")


def to_currency(value: Decimal | int | float | str | None) -> Decimal:
    """
    Quantize an amount to currency precision (2 places, ROUND_HALF_UP).

    None is treated as zero.  Floats are converted through ``str`` so the
    binary representation error is not carried into the Decimal.

    Raises:
        ValueError: If the value is not numeric.
    """
    if value is None:
        return ZERO_CURRENCY
    if isinstance(value, bool):
        raise ValueError(f"Not a currency amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Not a currency amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Not a currency amount: {value!r}")
    return amount.quantize(CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)
