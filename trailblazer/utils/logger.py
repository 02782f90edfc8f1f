"""Logging setup: structlog on top of the standard logging module."""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

HANDLER_NAME = "trailblazer"

SENSITIVE_KEYS = ("password", "token", "secret_key", "api_key")


def mask_secret(value: str) -> str:
    """Render a credential for log output; only whether it is set shows."""
    return "***" if value else "<unset>"


def redact_sensitive(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credential-looking values bound to a log event."""
    for key in SENSITIVE_KEYS:
        if event_dict.get(key):
            event_dict[key] = mask_secret(str(event_dict[key]))
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        redact_sensitive,
    ]


def configure_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog and route standard library records through it.

    Modules using ``logging.getLogger(__name__)`` and modules using
    ``get_logger(__name__)`` end up on the same stdout handler with the
    same rendering.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: One JSON object per line; the colored console renderer otherwise
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    renderer: Processor = (
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger bound to ``name``.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name)
