from __future__ import annotations

from typing import Dict, Type

import structlog

from modules.custom_digits.core.backends.base import NumberBackend
from modules.custom_digits.core.backends.bc import DecimalStringBackend
from modules.custom_digits.core.backends.fixed import FixedWidthBackend
from modules.custom_digits.core.backends.gmp import ArbitraryPrecisionBackend
from modules.custom_digits.core.errors import BackendUnavailableError

logger = structlog.get_logger(__name__)

BACKENDS: Dict[str, Type[NumberBackend]] = {
    "int": FixedWidthBackend,
    "fixed": FixedWidthBackend,
    "gmp": ArbitraryPrecisionBackend,
    "arbitrary": ArbitraryPrecisionBackend,
    "bc": DecimalStringBackend,
    "decimal": DecimalStringBackend,
}


def make_backend(backend: str | NumberBackend) -> NumberBackend:
    if isinstance(backend, NumberBackend):
        return backend
    key = str(backend).strip().lower()
    backend_cls = BACKENDS.get(key)
    if backend_cls is None:
        raise BackendUnavailableError(
            f"Unknown backend '{backend}'. Expected one of: {', '.join(sorted(BACKENDS))}."
        )
    instance = backend_cls()
    logger.debug("backend_selected", backend=instance.name)
    return instance
