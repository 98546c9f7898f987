"""Structured logging for requisite.

Everything in the package logs through structlog. Host applications that
already configure structlog do not need to call anything here; the helpers
exist for applications (and the test suite) that want a sensible default:

- Console rendering by default, JSON when ``REQUISITE_LOG_FORMAT=json``
- Level taken from ``REQUISITE_LOG_LEVEL`` (default ``WARNING``)
- Context binding through contextvars (``requirement_id``, ``host``)

Usage:
    from requisite.logging import configure_logging, get_logger

    configure_logging()

    log = get_logger(__name__).bind(requirement_id="location")
    log.debug("requirement_run_started", cases=3)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "get_logger",
    "configure_logging",
    "bind_context",
    "clear_context",
]

LOG_FORMAT_ENV_VAR = "REQUISITE_LOG_FORMAT"

LOG_LEVEL_ENV_VAR = "REQUISITE_LOG_LEVEL"

# Resolution runs are chatty at DEBUG; keep libraries quiet unless asked.
DEFAULT_LOG_LEVEL = "WARNING"


def _get_log_level() -> int:
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.WARNING)


def _is_json_output() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _shared_processors() -> list[Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer(use_json: bool) -> Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    force_json: bool = False,
    level: int | None = None,
) -> None:
    """Configure structlog and route stdlib logging through it.

    Safe to call more than once; each call replaces the previous
    configuration and the root handler it installed.

    Args:
        force_json: Render JSON regardless of ``REQUISITE_LOG_FORMAT``.
        level: Explicit log level. Falls back to ``REQUISITE_LOG_LEVEL``.
    """
    use_json = force_json or _is_json_output()
    log_level = level if level is not None else _get_log_level()

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(use_json),
            ],
            foreign_pre_chain=_shared_processors(),
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, optionally named after a module.

    Example:
        log = get_logger(__name__)
        log.debug("requirement_case_satisfied", case="NetworkCase")
    """
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


def bind_context(**context: Any) -> None:
    """Bind key/value pairs to every log line emitted in this context.

    Example:
        bind_context(host="checkout-screen")
        requirement.validate(listener)  # log lines carry host=...
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Drop everything bound with :func:`bind_context`."""
    structlog.contextvars.clear_contextvars()
