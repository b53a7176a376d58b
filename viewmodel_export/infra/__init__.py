"""
Infrastructure: logging and other process-level concerns.
"""

from .logging import add_context, clear_context, get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "add_context",
    "clear_context",
]
