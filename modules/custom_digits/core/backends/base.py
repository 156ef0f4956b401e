from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Tuple

from modules.custom_digits.core.limits import (
    bin_from_hex,
    clean_bin,
    clean_decimal,
    clean_hex,
    hex_from_bin,
    native_limits,
)


class NumberBackend(ABC):
    """Arithmetic contract shared by the big-number backends.

    Values produced by a backend are opaque to callers and must only be handed
    back to the same backend. Every value is a non-negative integer.

    Subclasses supply the small primitives (parse/render decimal, multiply-add
    and divide by a native int, compare, power). Hex parsing and rendering fall
    back to chunked algorithms over those primitives, and the alphabet-free
    base conversions are built on top of them.
    """

    name: ClassVar[str] = ""
    maximum_value: ClassVar[int | None] = None

    @abstractmethod
    def from_int(self, value: int) -> Any:
        ...

    @abstractmethod
    def from_decimal(self, value: object) -> Any:
        ...

    @abstractmethod
    def to_decimal(self, value: Any) -> str:
        ...

    @abstractmethod
    def divmod_small(self, value: Any, divisor: int) -> Tuple[Any, int]:
        ...

    @abstractmethod
    def mul_add(self, value: Any, multiplier: int, addend: int) -> Any:
        ...

    @abstractmethod
    def less_than(self, left: Any, right: Any) -> bool:
        ...

    @abstractmethod
    def is_zero(self, value: Any) -> bool:
        ...

    @abstractmethod
    def power(self, base: int, exponent: int) -> Any:
        ...

    @abstractmethod
    def subtract_one(self, value: Any) -> Any:
        ...

    def bounded_power(self, base: int, exponent: int) -> Any | None:
        """``base ** exponent``, or None when it exceeds ``maximum_value``."""
        return self.power(base, exponent)

    def from_hex(self, value: object) -> Any:
        digits = clean_hex(value)
        width = native_limits().hex_dec_chunk
        total = self.from_int(0)
        for idx in range(0, len(digits), width):
            chunk = digits[idx : idx + width]
            total = self.mul_add(total, 1 << (len(chunk) << 2), int(chunk, 16))
        return total

    def to_hex(self, value: Any) -> str:
        if self.is_zero(value):
            return "0"
        limits = native_limits()
        chunks = []
        while not self.is_zero(value):
            value, remainder = self.divmod_small(value, limits.dec_hex_divisor)
            chunks.append(remainder)
        chunks.reverse()
        head = format(chunks[0], "x")
        return head + "".join(format(chunk, f"0{limits.hex_dec_chunk}x") for chunk in chunks[1:])

    def bit_length(self, value: Any) -> int:
        digits = self.to_hex(value)
        return ((len(digits) - 1) << 2) + int(digits[0], 16).bit_length()

    def hex_from_decimal(self, decimal_number: object) -> str:
        digits = clean_decimal(decimal_number)
        if digits == "0":
            return "0"
        return self.to_hex(self.from_decimal(digits))

    def decimal_from_hex(self, hex_number: str) -> str:
        digits = clean_hex(hex_number)
        if digits == "0":
            return "0"
        return self.to_decimal(self.from_hex(digits))

    def bin_from_decimal(self, decimal_number: object) -> str:
        return bin_from_hex(self.hex_from_decimal(decimal_number))

    def decimal_from_bin(self, bin_number: str) -> str:
        digits = clean_bin(bin_number)
        if digits == "0":
            return "0"
        return self.decimal_from_hex(hex_from_bin(digits))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
