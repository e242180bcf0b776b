"""Mini README: Rounding helpers shared by the balance and settlement steps.

Structure:
    * CENT - quantum used when reporting amounts (two decimal places).
    * SETTLED_TOLERANCE - balances within this distance of zero are settled.
    * to_decimal - coerce user supplied numbers without float artefacts.
    * round_amount - half-up rounding to two decimal places.
    * is_positive_amount - finite, above-zero check that never raises.
    * MAX_AMOUNT_DIGITS - integer digits an accepted amount may carry.

Accumulation happens on exact values (``Decimal`` inputs, ``Fraction``
shares). Rounding is applied once, when figures are reported.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from fractions import Fraction
from typing import Union

Number = Union[Decimal, Fraction, int, float, str]

CENT = Decimal("0.01")
MAX_AMOUNT_DIGITS = 18
SETTLED_TOLERANCE = Decimal("0.01")


def to_decimal(value: object) -> Decimal:
    """Convert ``value`` to ``Decimal``, going through ``str`` for floats."""

    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("Amounts must be numeric, not boolean")
    if isinstance(value, (int, str)):
        try:
            return Decimal(str(value).strip())
        except InvalidOperation as error:
            raise ValueError(f"Invalid amount: {value!r}") from error
    if isinstance(value, float):
        return Decimal(repr(value))
    raise ValueError(f"Invalid amount: {value!r}")


def round_amount(value: Number) -> Decimal:
    """Round to two decimal places using half-up rounding."""

    if isinstance(value, Fraction):
        # Quantize the exact ratio rather than a truncated decimal expansion.
        scaled = value * 100
        whole, remainder = divmod(abs(scaled.numerator), scaled.denominator)
        if remainder * 2 >= scaled.denominator:
            whole += 1
        cents = whole if scaled >= 0 else -whole
        with localcontext() as context:
            context.prec = max(context.prec, whole.bit_length() // 3 + 2)
            return Decimal(cents).scaleb(-2)
    amount = to_decimal(value)
    with localcontext() as context:
        # quantize needs room for every integer digit plus the two cents.
        context.prec = max(context.prec, amount.adjusted() + 4)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def is_positive_amount(value: object) -> bool:
    """Return ``True`` for finite amounts above zero; anything else is ``False``."""

    try:
        amount = to_decimal(value)
    except ValueError:
        return False
    return amount.is_finite() and amount > 0
