"""Structured logging configuration for dashvars.

What gets logged where:
- INFO: one summary event per resolution (variables loaded, build order created)
- DEBUG: per-stage detail and dependency scanning
- WARNING/ERROR: undefined references and cycles, right before they are raised

Events go to stderr. stdout is reserved for JSON and DOT output so that
``dashvars order -f json | jq`` keeps working at any log level.
"""

import logging
import sys
from pathlib import Path

import structlog

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level(level: str) -> int:
    """Return the numeric level for a level name, INFO when the name is unknown."""
    return LOG_LEVELS.get(level.upper(), logging.INFO)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """
    Configure structured logging.

    Keys bound with ``structlog.contextvars.bound_contextvars`` (the CLI binds
    ``source``) are merged into every event.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render events as JSON lines instead of console text
        log_file: Optional path that receives a copy of every event
    """
    log_level = get_log_level(level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_path))

    logging.basicConfig(format="%(message)s", level=log_level, handlers=handlers, force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
