from __future__ import annotations

import random
import secrets
from typing import Any, Protocol, Tuple


class RandomByteSource(Protocol):
    def get_random_bytes(self, count: int) -> Tuple[bytes, bool]:
        """Return ``count`` random bytes and whether they are crypto-strong."""
        ...


class SystemByteSource:
    def get_random_bytes(self, count: int) -> Tuple[bytes, bool]:
        return secrets.token_bytes(count), True


class SeededByteSource:
    """Reproducible bytes from ``random.Random``; never crypto-strong."""

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def get_random_bytes(self, count: int) -> Tuple[bytes, bool]:
        return self._rng.randbytes(count), False


def parse_seed(value: Any) -> Tuple[int | None, str | None]:
    if value is None:
        return None, None
    raw = str(value).strip()
    if not raw:
        return None, None
    try:
        return int(raw), None
    except ValueError:
        return None, "Seed must be a whole number."


def make_byte_source(seed: int | None) -> RandomByteSource:
    if seed is None:
        return SystemByteSource()
    return SeededByteSource(seed)
