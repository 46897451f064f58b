"""Structured logging for righttypes.

Modules log through get_logger(), a plain structlog logger, so events follow
whatever structlog configuration the host application has set up. Importing
the library configures nothing. Applications without their own setup can call
configure_logging() once at startup to get JSON logs with stdlib integration.
"""

import logging
import logging.config
import sys
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from structlog.stdlib import BoundLogger


def _add_timestamp(
    _logger: object,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add ISO 8601 UTC timestamp with timezone offset."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


class LoggingSettings(BaseSettings):
    """Logging settings from environment variables."""

    log_level: str = Field(default="WARNING", alias="RIGHTTYPES_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog with JSON output to stderr. Opt-in; call once at startup.

    structlog configuration is process-wide, so this replaces any existing
    structlog setup. The stdlib "righttypes" logger gets its own handler and
    does not propagate, so events are not printed twice by root handlers.
    """
    if settings is None:
        settings = LoggingSettings()

    # Processors run on every log event
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,  # Auto-include bound context
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": structlog.processors.JSONRenderer(),
                    "foreign_pre_chain": processors,
                },
            },
            "handlers": {
                "righttypes": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": sys.stderr,
                },
            },
            "loggers": {
                "righttypes": {
                    "handlers": ["righttypes"],
                    "level": settings.log_level,
                    "propagate": False,
                },
            },
        }
    )


def get_logger(name: str) -> BoundLogger:
    """Get a structured logger.

    Args:
        name: Logger name, typically __name__

    Returns:
        Lazy structlog logger, rendered by the active structlog configuration.

    Example:
        logger = get_logger(__name__)
        logger.debug("schema_built", kind="map", name="{'a' str}")
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
