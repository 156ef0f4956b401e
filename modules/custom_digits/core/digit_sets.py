from __future__ import annotations

from typing import Dict

# Compatible with int(value, base) up to base 36.
DIGITS_70 = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_.*~!()-"

# gmp ordering for bases 37 to 62.
DIGITS_62_GMP = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

# Base 62 minus the look-alikes 0 1 2 5 8 B I O S Z l.
DIGITS_51_READABLE = "wkW34679AabCcDdEeFfGgHhiJjKLMmNnoPpQqRrsTtUuVvXxYyz"

DIGITS_10_ARABIC_EAST = "٠١٢٣٤٥٦٧٨٩"

DIGITS_BASE64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

DEFAULT_DIGITS = DIGITS_70

DIGIT_SETS: Dict[str, str] = {
    "digits70": DIGITS_70,
    "gmp62": DIGITS_62_GMP,
    "readable51": DIGITS_51_READABLE,
    "arabic_east": DIGITS_10_ARABIC_EAST,
    "base64": DIGITS_BASE64,
}


def resolve_digit_set(name: str | None) -> str | None:
    if name is None:
        return None
    return DIGIT_SETS.get(name.strip().lower())
