"""
Logging configuration using structlog.

Everything is routed through the stdlib root logger: a colored console
handler always, plus a JSON file handler when a log file is configured.
"""

import sys
import logging
from typing import Any
from pathlib import Path

import structlog
from structlog.types import Processor

# Libraries that log per-frame at DEBUG
NOISY_LOGGERS = ("PIL", "asyncio")


def render_geometry(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Render Rect/Region values as compact x,y wxh strings."""
    for key, value in list(event_dict.items()):
        to_log = getattr(value, "to_log", None)
        if callable(to_log):
            event_dict[key] = to_log()
        elif isinstance(value, tuple) and len(value) == 2 and key == "size":
            event_dict[key] = f"{value[0]}x{value[1]}"
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        render_geometry,
    ]


def _handler(
    handler: logging.Handler,
    renderer: Processor,
    pre_chain: list[Processor],
) -> logging.Handler:
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=pre_chain,
        )
    )
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
) -> None:
    """
    Configure structlog for the application.

    Calling it again replaces the previously installed handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path to a JSON-lines log file
    """
    numeric_level = getattr(logging, level.upper())
    processors = _shared_processors()

    structlog.configure(
        processors=processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers = [
        _handler(
            logging.StreamHandler(sys.stderr),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            processors,
        )
    ]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _handler(
                logging.FileHandler(log_file),
                structlog.processors.JSONRenderer(),
                processors,
            )
        )

    root_logger = logging.getLogger()
    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.INFO))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)
