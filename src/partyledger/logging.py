from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "partyledger"


def resolve_level(level: str) -> int:
    numeric_level = logging.getLevelName(level.strip().upper())
    return numeric_level if isinstance(numeric_level, int) else logging.INFO


def configure_logging(level: str = "INFO", *, json_output: bool = True) -> None:
    """Логи пакета уходят в stderr, stdout остаётся для отчётов CLI."""
    numeric_level = resolve_level(level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
