"""
Structured Logging Configuration
================================

structlog setup for the playground service. Standard library loggers
(uvicorn, httpx) are routed through the same renderer.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "sql-playground"

# Event keys whose values must never reach the log output
SECRET_KEYS = frozenset({"api_key", "x-api-key", "authorization", "password"})

# Library loggers that are noisy at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def redact_secrets(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credential values bound to an event."""
    for key in event_dict:
        if key.lower() in SECRET_KEYS and event_dict[key]:
            event_dict[key] = "***"
    return event_dict


def service_context(environment: str) -> Processor:
    """Build a processor that stamps service and environment on each event."""

    def add_service(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("environment", environment)
        return event_dict

    return add_service


def setup_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    environment: str = "development",
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Log level name
        json_format: Render JSON lines; None means JSON only in production
        environment: Deployment environment stamped on every event
    """
    if json_format is None:
        json_format = environment == "production"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        service_context(environment),
        redact_secrets,
    ]

    if json_format:
        shared_processors.append(structlog.processors.dict_tracebacks)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(logging.getLevelName(level.upper()))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind key-value pairs to every event logged in the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
