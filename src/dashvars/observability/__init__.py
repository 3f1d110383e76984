"""Observability - logging and reporting."""

from .logger import LOG_LEVELS, configure_logging, get_log_level
from .reporter import OrderReport, ReportGenerator

__all__ = [
    "LOG_LEVELS",
    "configure_logging",
    "get_log_level",
    "OrderReport",
    "ReportGenerator",
]
