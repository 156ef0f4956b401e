from __future__ import annotations

from typing import Tuple

from modules.custom_digits.core.backends.base import NumberBackend
from modules.custom_digits.core.errors import BackendUnavailableError
from modules.custom_digits.core.limits import clean_decimal, clean_hex

try:
    import gmpy2
except ImportError:  # pragma: no cover - depends on the environment
    gmpy2 = None


class ArbitraryPrecisionBackend(NumberBackend):
    """GMP-backed integers through ``gmpy2.mpz``; no upper bound."""

    name = "gmp"

    def __init__(self) -> None:
        if gmpy2 is None:
            raise BackendUnavailableError("Required library missing: gmpy2.")

    def from_int(self, value: int) -> "gmpy2.mpz":
        return gmpy2.mpz(value)

    def from_decimal(self, value: object) -> "gmpy2.mpz":
        return gmpy2.mpz(clean_decimal(value), 10)

    def from_hex(self, value: object) -> "gmpy2.mpz":
        return gmpy2.mpz(clean_hex(value), 16)

    def to_decimal(self, value: "gmpy2.mpz") -> str:
        return value.digits(10)

    def to_hex(self, value: "gmpy2.mpz") -> str:
        return value.digits(16)

    def divmod_small(self, value: "gmpy2.mpz", divisor: int) -> Tuple["gmpy2.mpz", int]:
        quotient, remainder = gmpy2.f_divmod(value, divisor)
        return quotient, int(remainder)

    def mul_add(self, value: "gmpy2.mpz", multiplier: int, addend: int) -> "gmpy2.mpz":
        return value * multiplier + addend

    def less_than(self, left: "gmpy2.mpz", right: "gmpy2.mpz") -> bool:
        return left < right

    def is_zero(self, value: "gmpy2.mpz") -> bool:
        return value == 0

    def power(self, base: int, exponent: int) -> "gmpy2.mpz":
        return gmpy2.mpz(base) ** exponent

    def subtract_one(self, value: "gmpy2.mpz") -> "gmpy2.mpz":
        if value == 0:
            raise ValueError("Cannot subtract one from zero.")
        return value - 1

    def bit_length(self, value: "gmpy2.mpz") -> int:
        return int(value.bit_length())
