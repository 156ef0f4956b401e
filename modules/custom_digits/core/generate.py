from __future__ import annotations

from typing import Any, Dict, List, Tuple

from modules.custom_digits.core.convert import build_converter, client_error
from modules.custom_digits.core.errors import CustomDigitsError
from modules.radix_core.core.rng import make_byte_source, parse_seed
from modules.radix_core.core.settings import get_settings


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


def generate_random_digits(
    length: Any,
    count: Any,
    *,
    digits: Any = None,
    digit_set: Any = None,
    radix: Any = None,
    use_unicode: bool = True,
    backend: Any = None,
    seed: Any = None,
) -> Tuple[Dict[str, object] | None, str | None]:
    settings = get_settings()

    length_int, error = _parse_int(length, label="Length", default=12)
    if error or length_int is None:
        return None, error
    count_int, error = _parse_int(count, label="Count", default=10)
    if error or count_int is None:
        return None, error

    if length_int <= 0 or length_int > settings.max_random_digits:
        return None, f"Length must be between 1 and {settings.max_random_digits}."
    if count_int <= 0 or count_int > settings.max_random_count:
        return None, f"Count must be between 1 and {settings.max_random_count}."

    seed_int, error = parse_seed(seed)
    if error:
        return None, error

    # A seed asks for a reproducible, non-crypto stream.
    converter, error = build_converter(
        digits=digits,
        digit_set=digit_set,
        radix=radix,
        use_unicode=use_unicode,
        backend=backend,
        byte_source=make_byte_source(seed_int),
        allow_non_crypto_random=True if seed_int is not None else None,
    )
    if error or converter is None:
        return None, error
    if converter.radix < 2:
        return None, "Radix must be at least 2 to generate random digits."

    values: List[str] = []
    try:
        for _ in range(count_int):
            value = converter.custom_random_digits(length_int, allow_overflow=True)
            if value is None:
                return None, "Unable to generate digits for this radix and length."
            values.append(value)
    except CustomDigitsError as exc:
        return None, client_error(exc)

    return {
        "count": count_int,
        "length": length_int,
        "radix": converter.radix,
        "backend": converter.backend.name,
        "seeded": seed_int is not None,
        "values": values,
    }, None
