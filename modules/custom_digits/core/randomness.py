from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

import structlog

from modules.custom_digits.core.errors import (
    InsecureRandomSourceError,
    RadixRangeError,
    RandomizationFailureError,
)
from modules.radix_core.core.rng import RandomByteSource, SystemByteSource

if TYPE_CHECKING:
    from modules.custom_digits.core.converter import RadixConverter

logger = structlog.get_logger(__name__)

MAX_RANDOM_ATTEMPTS = 100


class UniformRandomGenerator:
    """Uniform random values for a converter's radix, by rejection sampling.

    A draw takes exactly as many random bits as ``range - 1`` needs and is
    kept only when it falls below ``range``. Every value in ``[0, 2**bits)`` is
    equally likely, so the survivors are uniform over ``[0, range)``. Fewer
    than half of the draws are rejected, so a source that keeps failing for
    ``max_attempts`` draws is treated as broken.
    """

    def __init__(
        self,
        converter: "RadixConverter",
        source: RandomByteSource | None = None,
        *,
        max_attempts: int = MAX_RANDOM_ATTEMPTS,
    ) -> None:
        self._converter = converter
        self.source: RandomByteSource = source or SystemByteSource()
        self.max_attempts = max_attempts
        self._warned_non_crypto = False

    def random_bytes(self, n_bits: int) -> bytes:
        """Fetch ``ceil(n_bits / 8)`` bytes with the excess high bits cleared."""
        data, strong = self.source.get_random_bytes((n_bits + 7) >> 3)
        if not strong:
            if not self._converter.allow_non_crypto_random:
                raise InsecureRandomSourceError(
                    "Random source is not cryptographically strong."
                )
            if not self._warned_non_crypto:
                logger.warning("non_crypto_random_accepted", source=type(self.source).__name__)
                self._warned_non_crypto = True

        mask_bits = n_bits & 7
        if mask_bits and data:
            data = bytes([data[0] & ((1 << mask_bits) - 1)]) + data[1:]
        return data

    def hex_from_random_bits(self, n_bits: int) -> str:
        return self.random_bytes(n_bits).hex()

    def random_in_range(self, range_value: Any) -> Any | None:
        """Return a backend value uniform over ``[0, range_value)``.

        None when the range holds at most one value or lies outside what the
        backend can draw.
        """
        n_bits = self._converter.bits_for_range(range_value)
        if not n_bits:
            return None

        backend = self._converter.backend
        for attempt in range(1, self.max_attempts + 1):
            draw = backend.from_hex(self.hex_from_random_bits(n_bits))
            if backend.less_than(draw, range_value):
                return draw
            logger.debug("random_draw_rejected", attempt=attempt, bits=n_bits)

        raise RandomizationFailureError(
            f"Randomization failure ({n_bits} bits; range=0x{backend.to_hex(range_value)}) "
            f"after {self.max_attempts} draws."
        )

    def custom_random_from_internal_range(self, range_value: Any) -> str | None:
        value = self.random_in_range(range_value)
        if value is None:
            return None
        return self._converter.custom_from_internal(value)

    def chunk_capacity(self) -> int:
        """Most digits a single draw can cover within the backend's ceiling."""
        capacity = 0
        while self._converter.range_for_digit_count(capacity + 1) is not None:
            capacity += 1
        if capacity == 0:
            raise RadixRangeError(
                f"Radix {self._converter.radix} exceeds the backend's maximum value."
            )
        return capacity

    def random_digits(self, n_digits: int, *, allow_overflow: bool = False) -> str | None:
        n_digits = int(n_digits)
        if n_digits < 0:
            raise ValueError("Digit count must not be negative.")
        if n_digits == 0:
            return None

        range_value = self._converter.range_for_digit_count(n_digits)
        if range_value is not None:
            value = self.random_in_range(range_value)
            if value is None:
                return None
            return self._converter.custom_from_internal(value, n_digits)

        if not allow_overflow:
            return None

        # Each chunk is an independent draw over radix**size, i.e. a uniform
        # block of digits, so the concatenation is uniform over radix**n_digits.
        capacity = self.chunk_capacity()
        sizes: List[int] = []
        head = n_digits % capacity
        if head:
            sizes.append(head)
        sizes.extend([capacity] * (n_digits // capacity))
        logger.debug("random_digits_chunked", digits=n_digits, chunks=len(sizes), capacity=capacity)
        return "".join(self.random_digits(size) for size in sizes)
