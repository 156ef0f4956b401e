from __future__ import annotations

import os
from typing import Iterable, List, Tuple

import pytest

from modules.radix_core.core.logger import setup_logger
from modules.radix_core.core.settings import get_settings

BACKEND_NAMES = ["int", "gmp", "bc"]
UNBOUNDED_BACKEND_NAMES = ["gmp", "bc"]


class ScriptedByteSource:
    """Byte source replaying fixed chunks, recording every request."""

    def __init__(self, chunks: Iterable[bytes], *, strong: bool = True, repeat: bool = False) -> None:
        self.chunks: List[bytes] = list(chunks)
        self.strong = strong
        self.repeat = repeat
        self.requests: List[int] = []

    def get_random_bytes(self, count: int) -> Tuple[bytes, bool]:
        self.requests.append(count)
        chunk = self.chunks[0] if self.repeat else self.chunks.pop(0)
        return chunk[:count].rjust(count, b"\x00"), self.strong


@pytest.fixture(autouse=True, scope="session")
def _quiet_logs():
    setup_logger("WARNING", json_output=False)
    yield


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in list(os.environ):
        if name.startswith("CUSTOM_DIGITS_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(params=BACKEND_NAMES)
def backend_name(request) -> str:
    return request.param


@pytest.fixture(params=UNBOUNDED_BACKEND_NAMES)
def unbounded_backend_name(request) -> str:
    return request.param


@pytest.fixture
def scripted_source():
    return ScriptedByteSource
