from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import List

import structlog

from modules.custom_digits.core.errors import AlreadyInitializedError, MalformedNumberError

logger = structlog.get_logger(__name__)

_DECIMAL_RE = re.compile(r"[0-9]+")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")
_BIN_RE = re.compile(r"[01]+")


@dataclass(frozen=True)
class NativeLimits:
    """Chunk widths and ceilings derived from the interpreter's native integer."""

    native_bits: int
    significand_bits: int
    # hex digits per chunk for hex <-> binary
    hex_bin_chunk: int
    # bits per chunk for binary <-> hex
    bin_hex_chunk: int
    # hex digits per chunk for hex <-> decimal; the chunk value stays exact as a float
    hex_dec_chunk: int
    fixed_maximum: int

    @property
    def dec_hex_divisor(self) -> int:
        return 1 << (self.hex_dec_chunk << 2)


_limits: NativeLimits | None = None


def initialize_native_limits() -> NativeLimits:
    """Compute the process-wide limits. May run once per process."""
    global _limits
    if _limits is not None:
        raise AlreadyInitializedError("Native limits are already initialized.")

    native_bits = sys.maxsize.bit_length()
    significand_bits = sys.float_info.mant_dig
    hex_bin_chunk = native_bits >> 2
    _limits = NativeLimits(
        native_bits=native_bits,
        significand_bits=significand_bits,
        hex_bin_chunk=hex_bin_chunk,
        bin_hex_chunk=hex_bin_chunk << 2,
        hex_dec_chunk=(min(native_bits, significand_bits) - 1) >> 2,
        fixed_maximum=min(sys.maxsize, (1 << significand_bits) - 1),
    )
    logger.debug(
        "native_limits_initialized",
        native_bits=native_bits,
        significand_bits=significand_bits,
        fixed_maximum=_limits.fixed_maximum,
    )
    return _limits


def native_limits() -> NativeLimits:
    if _limits is None:
        return initialize_native_limits()
    return _limits


# str() of an int refuses more than ~4300 digits; 13000 bits stays below that.
_STR_SAFE_BITS = 13000
_LOG10_2 = 0.30102999566398


def _render_int(value: int) -> str:
    """Decimal digits of a non-negative int of any size."""
    if value.bit_length() <= _STR_SAFE_BITS:
        return str(value)
    width = int(value.bit_length() * _LOG10_2) >> 1
    high, low = divmod(value, 10**width)
    return _render_int(high) + _render_int(low).zfill(width)


def _clean(value: object, pattern: re.Pattern[str], base: str) -> str:
    if not isinstance(value, str) or not pattern.fullmatch(value):
        raise MalformedNumberError(value, base)
    stripped = value.lstrip("0")
    return stripped or "0"


def clean_decimal(value: object) -> str:
    """Validate a decimal string (or non-negative int) and drop leading zeros."""
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise MalformedNumberError(value, "decimal")
        return _render_int(value)
    return _clean(value, _DECIMAL_RE, "decimal")


def clean_hex(value: object) -> str:
    return _clean(value, _HEX_RE, "hexadecimal").lower()


def clean_bin(value: object) -> str:
    return _clean(value, _BIN_RE, "binary")


def split_from_right(text: str, width: int) -> List[str]:
    """Cut text into width-sized chunks aligned to its end, high-order chunk first."""
    head = len(text) % width
    chunks = [text[:head]] if head else []
    chunks.extend(text[idx : idx + width] for idx in range(head, len(text), width))
    return chunks


def hex_from_bin(bin_number: str) -> str:
    digits = clean_bin(bin_number)
    if digits == "0":
        return "0"
    limits = native_limits()
    chunks = split_from_right(digits, limits.bin_hex_chunk)
    parts = [format(int(chunks[0], 2), "x")]
    parts.extend(format(int(chunk, 2), f"0{limits.hex_bin_chunk}x") for chunk in chunks[1:])
    return "".join(parts)


def bin_from_hex(hex_number: str) -> str:
    digits = clean_hex(hex_number)
    if digits == "0":
        return "0"
    limits = native_limits()
    chunks = split_from_right(digits, limits.hex_bin_chunk)
    parts = [format(int(chunks[0], 16), "b")]
    parts.extend(format(int(chunk, 16), f"0{limits.bin_hex_chunk}b") for chunk in chunks[1:])
    return "".join(parts)
