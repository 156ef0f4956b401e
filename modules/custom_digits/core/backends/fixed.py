from __future__ import annotations

import sys
from typing import ClassVar, Tuple

import structlog

from modules.custom_digits.core.backends.base import NumberBackend
from modules.custom_digits.core.limits import clean_decimal, clean_hex, native_limits

logger = structlog.get_logger(__name__)

# decimal digits folded per step; 10**18 still fits the native word
DECIMAL_CHUNK = 18


class FixedWidthBackend(NumberBackend):
    """Native-int backend limited to the interpreter's machine word.

    Values wrap at the native width (``sys.maxsize``), as machine arithmetic
    would. Random ranges are further capped at ``maximum_value``, the largest
    integer that is still exact as a double.
    """

    name = "int"
    maximum_value: ClassVar[int | None] = native_limits().fixed_maximum
    native_mask: ClassVar[int] = sys.maxsize

    def _wrap(self, value: int, *, source: str) -> int:
        wrapped = value & self.native_mask
        if wrapped != value:
            logger.debug("fixed_width_wrapped", source=source, bits=value.bit_length())
        return wrapped

    def from_int(self, value: int) -> int:
        return self._wrap(value, source="int")

    def from_decimal(self, value: object) -> int:
        digits = clean_decimal(value)
        total = 0
        wrapped = False
        for idx in range(0, len(digits), DECIMAL_CHUNK):
            chunk = digits[idx : idx + DECIMAL_CHUNK]
            total = total * 10 ** len(chunk) + int(chunk)
            if total > self.native_mask:
                total &= self.native_mask
                wrapped = True
        if wrapped:
            logger.debug("fixed_width_wrapped", source="decimal", digits=len(digits))
        return total

    def from_hex(self, value: object) -> int:
        return self._wrap(int(clean_hex(value), 16), source="hex")

    def to_decimal(self, value: int) -> str:
        return str(value)

    def to_hex(self, value: int) -> str:
        return format(value, "x")

    def divmod_small(self, value: int, divisor: int) -> Tuple[int, int]:
        return divmod(value, divisor)

    def mul_add(self, value: int, multiplier: int, addend: int) -> int:
        return (value * multiplier + addend) & self.native_mask

    def less_than(self, left: int, right: int) -> bool:
        return left < right

    def is_zero(self, value: int) -> bool:
        return value == 0

    def power(self, base: int, exponent: int) -> int:
        return pow(base, exponent, self.native_mask + 1)

    def bounded_power(self, base: int, exponent: int) -> int | None:
        if base < 2:
            return 1 if exponent == 0 else base
        result = 1
        for _ in range(exponent):
            result *= base
            if result > self.maximum_value:
                return None
        return result

    def subtract_one(self, value: int) -> int:
        if value == 0:
            raise ValueError("Cannot subtract one from zero.")
        return value - 1

    def bit_length(self, value: int) -> int:
        return value.bit_length()
