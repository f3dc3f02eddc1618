"""
Utility functions and services.
"""

from .structured_logger import (
    StructuredLogger,
    LoggingContext,
    get_structured_logger,
    configure_logging,
)

__all__ = [
    'StructuredLogger',
    'LoggingContext',
    'get_structured_logger',
    'configure_logging',
]
