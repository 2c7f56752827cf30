"""
Centralized logging utilities for nix8820.

Provides standardized logging functions for common scenarios to reduce duplication
and ensure consistent log formatting across the codebase.
"""

import logging
from typing import Any


def log_parsing_warning(logger: logging.Logger, operation: str, reason: str) -> None:
    """Log parsing warnings with consistent format."""
    logger.warning(f"{operation}: {reason}")


def log_debug_operation(
    logger: logging.Logger, operation: str, details: Any = None
) -> None:
    """Log debug information for operations."""
    if details is not None:
        logger.debug(f"{operation}: {details}")
    else:
        logger.debug(f"{operation}")


def log_data_processing(
    logger: logging.Logger, operation: str, data_info: str = ""
) -> None:
    """Log data processing operations with consistent format."""
    info_str = f" - {data_info}" if data_info else ""
    logger.debug(f"[DATA] {operation}{info_str}")


def log_disk_event(logger: logging.Logger, event_type: str, details: str = "") -> None:
    """Log disk image events with consistent format."""
    detail_str = f": {details}" if details else ""
    logger.debug(f"[DISK] {event_type}{detail_str}")


__all__ = [
    "log_parsing_warning",
    "log_debug_operation",
    "log_data_processing",
    "log_disk_event",
]
