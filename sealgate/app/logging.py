"""
Structured logging setup

Configures structlog on top of the stdlib logging package so that
application, uvicorn and FastAPI records share one renderer.

    from sealgate.app.logging import setup_logging, get_logger

    setup_logging(level="INFO", log_format="console")
    log = get_logger(__name__)
    log.info("payload_signed", fields=3)
"""

import logging
import sys
from typing import Any, Dict

import structlog


REDACT_KEYS = {"secret", "secret_key", "key", "signature", "authorization"}


def _redact_secrets(_: Any, __: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Processor that masks values logged under secret-looking keys."""
    for k in list(event_dict.keys()):
        if k.lower() in REDACT_KEYS and event_dict[k] is not None:
            event_dict[k] = "***"
    return event_dict


def setup_logging(level: str = "INFO", log_format: str = "console") -> None:
    """
    Configure structlog + stdlib logging. Safe to call more than once.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        log_format: "console" for human-readable output, "json" otherwise
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _redact_secrets,
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    # Route uvicorn's own loggers through the root handler
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers[:] = []
        uv_logger.propagate = True


def get_logger(name: str = "sealgate"):
    """Get a structlog logger bound to name."""
    return structlog.get_logger(name)
