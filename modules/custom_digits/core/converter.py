from __future__ import annotations

import math
from typing import Any, Sequence, Tuple

import structlog

from modules.custom_digits.core.alphabet import DigitAlphabet
from modules.custom_digits.core.backends.base import NumberBackend
from modules.custom_digits.core.backends.registry import make_backend
from modules.custom_digits.core.cache import MISSING, InsertionOrderedCache
from modules.custom_digits.core.errors import RadixRangeError
from modules.custom_digits.core.limits import bin_from_hex, hex_from_bin
from modules.custom_digits.core.randomness import UniformRandomGenerator
from modules.radix_core.core.rng import RandomByteSource
from modules.radix_core.core.settings import get_settings

logger = structlog.get_logger(__name__)


class RadixConverter:
    """Convert non-negative integers to and from a custom digit alphabet.

    A converter binds one :class:`DigitAlphabet` to one arithmetic backend
    (``"gmp"``, ``"bc"`` or ``"int"``). Values returned by the ``internal_from_*``
    methods belong to that backend and should only be passed back to the same
    converter.

    Example::

        converter = RadixConverter("XYZT")
        converter.custom_from_decimal(105)  # "YZZY"

    Instances are not thread-safe: the memo tables and the alphabet are
    replaced in place.
    """

    def __init__(
        self,
        digits: str | Sequence[str] | None = None,
        radix: int | None = None,
        use_unicode: bool | None = None,
        *,
        backend: str | NumberBackend | None = None,
        byte_source: RandomByteSource | None = None,
        allow_non_crypto_random: bool | None = None,
        cache_max_entries: int | None = None,
        cache_trim_chunk: int | None = None,
    ) -> None:
        settings = get_settings()
        self._backend = make_backend(backend if backend is not None else settings.backend)
        self.allow_non_crypto_random = (
            settings.allow_non_crypto_random
            if allow_non_crypto_random is None
            else bool(allow_non_crypto_random)
        )
        max_entries = cache_max_entries or settings.cache_max_entries
        trim_chunk = cache_trim_chunk or settings.cache_trim_chunk
        self._range_for_digits = InsertionOrderedCache(max_entries, trim_chunk)
        self._bits_for_range = InsertionOrderedCache(max_entries, trim_chunk)
        self._random = UniformRandomGenerator(self, byte_source)
        self.init(digits, radix, settings.use_unicode if use_unicode is None else use_unicode)

    def init(
        self,
        digits: str | Sequence[str] | None = None,
        radix: int | None = None,
        use_unicode: bool = True,
    ) -> None:
        """Replace the alphabet; the previous settings are discarded.

        The new alphabet is validated before anything is changed.
        """
        alphabet = DigitAlphabet.build(digits, radix, use_unicode)
        self._alphabet = alphabet
        self._range_for_digits.clear()
        self._bits_for_range.clear()
        logger.debug(
            "converter_initialized",
            radix=alphabet.radix,
            backend=self._backend.name,
            use_unicode=alphabet.use_unicode,
        )

    @property
    def alphabet(self) -> DigitAlphabet:
        return self._alphabet

    @property
    def backend(self) -> NumberBackend:
        return self._backend

    @property
    def radix(self) -> int:
        return self._alphabet.radix

    @property
    def digits(self) -> Tuple[str, ...]:
        return self._alphabet.symbols

    @property
    def use_unicode(self) -> bool:
        return self._alphabet.use_unicode

    @property
    def maximum_value(self) -> int | None:
        return self._backend.maximum_value

    @property
    def random(self) -> UniformRandomGenerator:
        return self._random

    # validation

    def validate_custom_digit(self, digit: str) -> None:
        self._alphabet.validate_digit(digit)

    def validate_custom_number(self, custom_number: str) -> None:
        self._alphabet.validate_number(custom_number)

    # custom numbers

    def custom_from_internal(self, internal: Any, min_digits: int = 1) -> str:
        backend = self._backend
        alphabet = self._alphabet
        radix = alphabet.radix
        if radix == 1 and not backend.is_zero(internal):
            raise RadixRangeError("Radix 1 can only represent zero.")

        symbols = []
        while not backend.is_zero(internal):
            internal, remainder = backend.divmod_small(internal, radix)
            symbols.append(alphabet.symbol_for(remainder))
        symbols.reverse()

        padding = min_digits - len(symbols)
        if padding > 0:
            return alphabet.zero * padding + "".join(symbols)
        return "".join(symbols)

    def custom_from_decimal(self, decimal_number: object, min_digits: int = 1) -> str:
        return self.custom_from_internal(self._backend.from_decimal(decimal_number), min_digits)

    def custom_from_hex(self, hex_number: str, min_digits: int = 1) -> str:
        return self.custom_from_internal(self._backend.from_hex(hex_number), min_digits)

    def internal_from_custom(self, custom_number: str) -> Any:
        backend = self._backend
        alphabet = self._alphabet
        radix = alphabet.radix
        total = backend.from_int(0)
        for symbol in alphabet.split(custom_number):
            total = backend.mul_add(total, radix, alphabet.value_of(symbol))
        return total

    def internal_from_decimal(self, decimal_number: object) -> Any:
        return self._backend.from_decimal(decimal_number)

    def internal_from_hex(self, hex_number: str) -> Any:
        return self._backend.from_hex(hex_number)

    def decimal_from_internal(self, internal: Any) -> str:
        return self._backend.to_decimal(internal)

    def hex_from_internal(self, internal: Any) -> str:
        return self._backend.to_hex(internal)

    def decimal_from_custom(self, custom_number: str) -> str:
        return self._backend.to_decimal(self.internal_from_custom(custom_number))

    def hex_from_custom(self, custom_number: str) -> str:
        return self._backend.to_hex(self.internal_from_custom(custom_number))

    # alphabet-independent conversions

    def hex_from_decimal(self, decimal_number: object) -> str:
        return self._backend.hex_from_decimal(decimal_number)

    def decimal_from_hex(self, hex_number: str) -> str:
        return self._backend.decimal_from_hex(hex_number)

    def bin_from_decimal(self, decimal_number: object) -> str:
        return self._backend.bin_from_decimal(decimal_number)

    def decimal_from_bin(self, bin_number: str) -> str:
        return self._backend.decimal_from_bin(bin_number)

    @staticmethod
    def hex_from_bin(bin_number: str) -> str:
        return hex_from_bin(bin_number)

    @staticmethod
    def bin_from_hex(hex_number: str) -> str:
        return bin_from_hex(hex_number)

    # raw byte strings

    def custom_from_raw(self, data: bytes) -> str:
        """Render bytes (big-endian) with enough digits to hold every bit.

        With the base64 digit set this reproduces standard base64 for inputs
        whose length is a multiple of three.
        """
        self._require_positional_radix()
        data = bytes(data)
        if not data:
            return ""
        min_digits = self._digits_for_bits(len(data) * 8)
        return self.custom_from_internal(self._backend.from_hex(data.hex()), min_digits)

    def raw_from_custom(self, custom_number: str) -> bytes:
        self._require_positional_radix()
        symbol_count = len(self._alphabet.split(custom_number))
        internal = self.internal_from_custom(custom_number)
        n_bytes = ((self.radix**symbol_count).bit_length() - 1) >> 3

        hex_digits = "" if self._backend.is_zero(internal) else self._backend.to_hex(internal)
        n_bytes = max(n_bytes, (len(hex_digits) + 1) >> 1)
        return bytes.fromhex(hex_digits.rjust(n_bytes * 2, "0"))

    def _require_positional_radix(self) -> None:
        if self.radix < 2:
            raise RadixRangeError("Raw conversion needs a radix of at least 2.")

    def _digits_for_bits(self, n_bits: int) -> int:
        radix = self.radix
        target = 1 << n_bits
        count = max(1, math.ceil(n_bits / math.log2(radix)))
        while radix**count < target:
            count += 1
        while count > 1 and radix ** (count - 1) >= target:
            count -= 1
        return count

    # ranges and randomness

    def range_for_digit_count(self, n_digits: int) -> Any | None:
        """``radix ** n_digits`` as a backend value, or None past the backend's ceiling."""
        cached = self._range_for_digits.lookup(n_digits)
        if cached is not MISSING:
            return cached
        range_value = self._backend.bounded_power(self.radix, n_digits)
        return self._range_for_digits.store(n_digits, range_value)

    def bits_for_range(self, range_value: Any) -> int | None:
        """Bits needed to draw any value below ``range_value``."""
        cached = self._bits_for_range.lookup(range_value)
        if cached is not MISSING:
            return cached

        backend = self._backend
        limit = backend.maximum_value
        if backend.is_zero(range_value):
            n_bits = None
        elif limit is not None and backend.less_than(backend.from_int(limit), range_value):
            n_bits = None
        else:
            n_bits = backend.bit_length(backend.subtract_one(range_value))
        return self._bits_for_range.store(range_value, n_bits)

    def hex_from_random_bits(self, n_bits: int) -> str:
        return self._random.hex_from_random_bits(n_bits)

    def random_in_range(self, range_value: Any) -> Any | None:
        return self._random.random_in_range(range_value)

    def custom_random_from_internal_range(self, range_value: Any) -> str | None:
        return self._random.custom_random_from_internal_range(range_value)

    def custom_random_digits(self, n_digits: int, *, allow_overflow: bool = False) -> str | None:
        return self._random.random_digits(n_digits, allow_overflow=allow_overflow)

    def __repr__(self) -> str:
        return f"RadixConverter(radix={self.radix}, backend={self._backend.name!r})"
