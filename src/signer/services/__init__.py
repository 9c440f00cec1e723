"""
Services package - Process-level services for Signer.

Contains:
- configure_logging: Console and daily-file logging
"""

from .logging import configure_logging, cleanup_old_logs, get_log_file_path

__all__ = [
    "configure_logging",
    "cleanup_old_logs",
    "get_log_file_path",
]
