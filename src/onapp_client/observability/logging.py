"""Structured logging for the OnApp client.

The transport logs through structlog (``get_logger``); services log through
``logging.getLogger(__name__)``. ``configure_logging`` routes both through
one structlog formatter so every line carries the same keys.

A correlation id bound with ``bound_request_id`` is added to each log entry
and sent to the control panel as ``X-Request-ID``::

    from onapp_client.observability.logging import bound_request_id, configure_logging

    configure_logging(json_output=False)
    with bound_request_id("deploy-1234"):
        await actions.reboot(42)
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import IO, Iterator

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

# Loggers that would duplicate our own per-request lines.
_QUIET_LOGGERS = ("httpx", "httpcore")

_configured = False


@contextmanager
def bound_request_id(request_id: str) -> Iterator[str]:
    """Bind ``request_id`` for API calls and log entries inside the block."""
    token = request_id_ctx.set(request_id)
    try:
        yield request_id
    finally:
        request_id_ctx.reset(token)


def _add_request_id(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict,
) -> dict:
    rid = request_id_ctx.get()
    if rid is not None:
        event_dict.setdefault("request_id", rid)
    return event_dict


def configure_logging(
    *,
    level: str | None = None,
    json_output: bool | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure structlog and the stdlib root logger once per process.

    Args:
        level: Log level name. Defaults to LOG_LEVEL env var or INFO.
        json_output: JSON lines if True, console rendering if False.
            Defaults to LOG_FORMAT env var == "json".
        stream: Where to write; defaults to stdout.
    """
    global _configured
    if _configured:
        return
    _configured = True

    level = level or os.environ.get("LOG_LEVEL", "INFO")
    if json_output is None:
        json_output = os.environ.get("LOG_FORMAT", "json") == "json"

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        _add_request_id,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def _reset_for_tests() -> None:
    global _configured
    _configured = False
    structlog.reset_defaults()
