from __future__ import annotations

from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    Rounded,
)
from typing import Tuple

from modules.custom_digits.core.backends.base import NumberBackend
from modules.custom_digits.core.limits import clean_decimal

# Any rounding means the context was too narrow; fail instead of losing digits.
_TRAPS = [InvalidOperation, DivisionByZero, Overflow, Inexact, Rounded]
_MIN_PRECISION = 28


def _exact_context(digits: int) -> Context:
    return Context(
        prec=max(digits, _MIN_PRECISION),
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=_TRAPS,
    )


def _render(value: Decimal) -> str:
    return format(value, "f")


class DecimalStringBackend(NumberBackend):
    """Decimal-string arithmetic, the bc way.

    Values are canonical strings of decimal digits (no leading zeros, zero is
    ``"0"``). Each primitive runs in a ``decimal`` context sized to the operands
    so results are exact; hex goes through the chunked helpers on the base.
    """

    name = "bc"

    def from_int(self, value: int) -> str:
        return clean_decimal(value)

    def from_decimal(self, value: object) -> str:
        return clean_decimal(value)

    def to_decimal(self, value: str) -> str:
        return value

    def divmod_small(self, value: str, divisor: int) -> Tuple[str, int]:
        ctx = _exact_context(len(value) + 1)
        quotient, remainder = ctx.divmod(Decimal(value), Decimal(divisor))
        return _render(quotient), int(remainder)

    def mul_add(self, value: str, multiplier: int, addend: int) -> str:
        ctx = _exact_context(len(value) + len(str(multiplier)) + len(str(addend)) + 1)
        product = ctx.multiply(Decimal(value), Decimal(multiplier))
        return _render(ctx.add(product, Decimal(addend)))

    def less_than(self, left: str, right: str) -> bool:
        return (len(left), left) < (len(right), right)

    def is_zero(self, value: str) -> bool:
        return value == "0"

    def power(self, base: int, exponent: int) -> str:
        if exponent == 0:
            return "1"
        ctx = _exact_context(exponent * len(str(base)) + 1)
        return _render(ctx.power(Decimal(base), Decimal(exponent)))

    def subtract_one(self, value: str) -> str:
        if value == "0":
            raise ValueError("Cannot subtract one from zero.")
        ctx = _exact_context(len(value) + 1)
        return _render(ctx.subtract(Decimal(value), Decimal(1)))
