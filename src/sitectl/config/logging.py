"""Logging setup for a sitectl invocation.

structlog events and plain ``logging`` records share one stderr handler,
rendered for a terminal by default or as JSON lines with ``--log-json``.
Any event field that looks like a credential is masked before rendering.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from pydantic import SecretStr

REDACTED = "**********"
_SECRET_KEYS = frozenset({"oauth_token", "token", "access_token", "password", "secret"})

# Third-party loggers that stay at WARNING even with -v.
_QUIET_LOGGERS = ("sqlalchemy", "pluggy")


def redact_secrets(
    _logger: Any, _method: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Mask credential-named fields and any ``SecretStr`` value."""
    for key, value in event_dict.items():
        if key in _SECRET_KEYS or isinstance(value, SecretStr):
            event_dict[key] = REDACTED
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route all logging to stderr; safe to call once per CLI invocation.

    Args:
        verbose: DEBUG for the ``sitectl`` loggers; WARNING otherwise.
        log_json: JSON lines instead of the console renderer.
    """
    shared = _shared_processors()
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("sitectl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
