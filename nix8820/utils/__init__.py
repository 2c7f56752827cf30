"""
Utilities package for nix8820.

Contains common utility functions used across the nix8820 codebase.
"""

from .logging_utils import (
    log_data_processing,
    log_debug_operation,
    log_disk_event,
    log_parsing_warning,
)

__all__ = [
    "log_parsing_warning",
    "log_debug_operation",
    "log_data_processing",
    "log_disk_event",
]
