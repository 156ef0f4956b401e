from __future__ import annotations

import logging

import structlog

from modules.radix_core.core.settings import get_settings


def setup_logger(level: str | None = None, *, json_output: bool | None = None):
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    level_value = logging.getLevelName(level_name)
    if not isinstance(level_value, int):
        level_value = logging.INFO
    if json_output is None:
        json_output = settings.log_json

    logging.basicConfig(format="%(message)s", level=level_value)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    return structlog.get_logger()
