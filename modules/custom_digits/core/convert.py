from __future__ import annotations

from typing import Any, Dict, Tuple

from modules.custom_digits.core.backends.registry import BACKENDS
from modules.custom_digits.core.converter import RadixConverter
from modules.custom_digits.core.digit_sets import DIGIT_SETS, resolve_digit_set
from modules.custom_digits.core.errors import CustomDigitsError
from modules.custom_digits.core.limits import bin_from_hex, hex_from_bin
from modules.radix_core.core.rng import RandomByteSource
from modules.radix_core.core.settings import get_settings

NUMBER_BASES = ("decimal", "hex", "bin", "custom")
MAX_MIN_DIGITS = 4096


def _parse_int(value: Any, *, label: str, default: int | None = None) -> Tuple[int | None, str | None]:
    if value is None or str(value).strip() == "":
        if default is None:
            return None, f"{label} is required."
        return default, None
    raw = str(value).strip()
    try:
        number = int(raw)
    except ValueError:
        return None, f"{label} must be a whole number."
    return number, None


def _parse_number_base(value: object, *, label: str) -> Tuple[str | None, str | None]:
    if value is None:
        return None, f"{label} is required."
    raw = str(value).strip().lower()
    if not raw:
        return None, f"{label} is required."
    if raw not in NUMBER_BASES:
        return None, f"{label} must be one of: {', '.join(NUMBER_BASES)}."
    return raw, None


def _strip_prefix(value: str, base: str) -> str:
    if base == "hex" and value.lower().startswith("0x"):
        return value[2:]
    if base == "bin" and value.lower().startswith("0b"):
        return value[2:]
    return value


def client_error(exc: CustomDigitsError) -> str:
    """Return the message of a caller-side error; re-raise server-side ones."""
    if exc.status_code >= 500:
        raise exc
    return exc.detail


def build_converter(
    *,
    digits: Any = None,
    digit_set: Any = None,
    radix: Any = None,
    use_unicode: bool = True,
    backend: Any = None,
    byte_source: RandomByteSource | None = None,
    allow_non_crypto_random: bool | None = None,
) -> Tuple[RadixConverter | None, str | None]:
    alphabet: str | None = None
    if digit_set is not None and str(digit_set).strip():
        alphabet = resolve_digit_set(str(digit_set))
        if alphabet is None:
            return None, f"Digit set must be one of: {', '.join(sorted(DIGIT_SETS))}."
    if digits is not None and str(digits) != "":
        if alphabet is not None:
            return None, "Provide either digits or a digit set, not both."
        alphabet = str(digits)

    radix_int = None
    if radix is not None and str(radix).strip() != "":
        radix_int, error = _parse_int(radix, label="Radix")
        if error:
            return None, error

    backend_name = str(backend).strip().lower() if backend else get_settings().backend
    if backend_name not in BACKENDS:
        return None, f"Backend must be one of: {', '.join(sorted(BACKENDS))}."

    try:
        converter = RadixConverter(
            alphabet,
            radix_int,
            use_unicode,
            backend=backend_name,
            byte_source=byte_source,
            allow_non_crypto_random=allow_non_crypto_random,
        )
    except CustomDigitsError as exc:
        return None, client_error(exc)
    return converter, None


def convert_number(
    value: Any,
    source: Any,
    target: Any,
    *,
    digits: Any = None,
    digit_set: Any = None,
    radix: Any = None,
    min_digits: Any = None,
    use_unicode: bool = True,
    backend: Any = None,
) -> Tuple[Dict[str, object] | None, str | None]:
    if value is None or str(value).strip() == "":
        return None, "Value is required."

    source_base, error = _parse_number_base(source, label="From")
    if error or source_base is None:
        return None, error
    target_base, error = _parse_number_base(target, label="To")
    if error or target_base is None:
        return None, error

    min_digits_int, error = _parse_int(min_digits, label="Minimum digits", default=1)
    if error or min_digits_int is None:
        return None, error
    if min_digits_int < 0 or min_digits_int > MAX_MIN_DIGITS:
        return None, f"Minimum digits must be between 0 and {MAX_MIN_DIGITS}."

    converter, error = build_converter(
        digits=digits,
        digit_set=digit_set,
        radix=radix,
        use_unicode=use_unicode,
        backend=backend,
    )
    if error or converter is None:
        return None, error

    raw = str(value) if source_base == "custom" else str(value).strip().replace("_", "")
    raw = _strip_prefix(raw, source_base)

    try:
        if source_base == "decimal":
            internal = converter.internal_from_decimal(raw)
        elif source_base == "hex":
            internal = converter.internal_from_hex(raw)
        elif source_base == "bin":
            internal = converter.internal_from_hex(hex_from_bin(raw))
        else:
            internal = converter.internal_from_custom(raw)

        if target_base == "decimal":
            converted = converter.decimal_from_internal(internal)
        elif target_base == "hex":
            converted = converter.hex_from_internal(internal)
        elif target_base == "bin":
            converted = bin_from_hex(converter.hex_from_internal(internal))
        else:
            converted = converter.custom_from_internal(internal, min_digits_int)
    except CustomDigitsError as exc:
        return None, client_error(exc)

    return {
        "input": str(value),
        "from": source_base,
        "to": target_base,
        "radix": converter.radix,
        "backend": converter.backend.name,
        "decimal": converter.decimal_from_internal(internal),
        "converted": converted,
    }, None
