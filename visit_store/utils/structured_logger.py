"""
Structured JSON logging for the visit store.

This module provides a structured logger that outputs JSON-formatted
logs with the user entity reference, context, and standardized fields so store
activity can be queried by user and operation.
"""

import json
import logging
import os
import time
from typing import Optional
from datetime import datetime, timezone
from decimal import Decimal


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal types."""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        return super().default(obj)


class StructuredLogger:
    """
    Structured JSON logger.

    Outputs logs in JSON format with:
    - Timestamp (ISO 8601)
    - Log level
    - User correlation (userEntityRef)
    - Component and operation
    - Message and additional context
    """

    def __init__(
        self,
        component: str,
        user_entity_ref: Optional[str] = None,
        log_level: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component name (e.g., 'VisitsStore', 'OwnershipService')
            user_entity_ref: Entity reference of the user whose visits are handled
            log_level: Log level name; defaults to the LOG_LEVEL environment variable
        """
        self.component = component
        self.user_entity_ref = user_entity_ref
        self.logger = logging.getLogger(component)

        log_level = log_level or os.getenv('LOG_LEVEL', 'INFO')
        self.logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    def _format_log(
        self,
        level: str,
        message: str,
        operation: Optional[str] = None,
        **kwargs
    ) -> str:
        """
        Format log entry as JSON.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            message: Log message
            operation: Operation being performed
            **kwargs: Additional context fields

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': level,
            'component': self.component,
            'message': message
        }

        if self.user_entity_ref:
            log_entry['userEntityRef'] = self.user_entity_ref

        if operation:
            log_entry['operation'] = operation

        if kwargs:
            log_entry['context'] = kwargs

        return json.dumps(log_entry, cls=DecimalEncoder)

    def debug(self, message: str, operation: Optional[str] = None, **kwargs) -> None:
        """Log debug message."""
        self.logger.debug(self._format_log('DEBUG', message, operation, **kwargs))

    def info(self, message: str, operation: Optional[str] = None, **kwargs) -> None:
        """Log info message."""
        self.logger.info(self._format_log('INFO', message, operation, **kwargs))

    def warning(self, message: str, operation: Optional[str] = None, **kwargs) -> None:
        """Log warning message."""
        self.logger.warning(self._format_log('WARNING', message, operation, **kwargs))

    def error(
        self,
        message: str,
        operation: Optional[str] = None,
        error: Optional[Exception] = None,
        **kwargs
    ) -> None:
        """
        Log error message.

        Args:
            message: Log message
            operation: Operation being performed
            error: Exception object if available
            **kwargs: Additional context
        """
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_message'] = str(error)

        self.logger.error(
            self._format_log('ERROR', message, operation, **kwargs)
        )

    def log_eviction(self, evicted_ids: list, limit: int) -> None:
        """
        Log visits evicted by the capacity limit at INFO level.

        Args:
            evicted_ids: Identifiers of the evicted visits
            limit: Configured capacity
        """
        self.info(
            f'Evicted {len(evicted_ids)} visits over limit',
            operation='eviction',
            evicted_ids=evicted_ids,
            limit=limit
        )


class LoggingContext:
    """
    Context manager for logging operation duration.

    Automatically logs operation start, end, and duration, and the error
    when the block raises. Exceptions are never suppressed.
    """

    def __init__(
        self,
        logger: StructuredLogger,
        operation: str,
        **kwargs
    ):
        """
        Initialize logging context.

        Args:
            logger: StructuredLogger instance
            operation: Operation name
            **kwargs: Additional context
        """
        self.logger = logger
        self.operation = operation
        self.context = kwargs
        self.start_time: Optional[float] = None

    def __enter__(self):
        """Log operation start."""
        self.start_time = time.time()
        self.logger.debug(
            f'Starting operation: {self.operation}',
            operation=self.operation,
            **self.context
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Log operation end and duration."""
        if self.start_time is not None:
            duration_ms = (time.time() - self.start_time) * 1000

            if exc_type is not None:
                self.logger.error(
                    f'Operation failed: {self.operation}',
                    operation=self.operation,
                    error=exc_val,
                    duration_ms=duration_ms,
                    **self.context
                )
            else:
                self.logger.debug(
                    f'Completed operation: {self.operation}',
                    operation=self.operation,
                    duration_ms=duration_ms,
                    **self.context
                )
        return False


def get_structured_logger(
    component: str,
    user_entity_ref: Optional[str] = None,
    log_level: Optional[str] = None
) -> StructuredLogger:
    """
    Factory function for creating StructuredLogger instances.

    Args:
        component: Name of the component (e.g., 'VisitsStore')
        user_entity_ref: Optional user entity reference for context
        log_level: Optional log level name overriding LOG_LEVEL

    Returns:
        Configured StructuredLogger instance

    Example:
        >>> logger = get_structured_logger(
        ...     'VisitsStore',
        ...     user_entity_ref='user:default/john'
        ... )
        >>> logger.info('Visit saved')
    """
    return StructuredLogger(
        component=component,
        user_entity_ref=user_entity_ref,
        log_level=log_level
    )


def configure_logging(log_level: Optional[str] = None) -> None:
    """
    Configure root logging for JSON output.

    Args:
        log_level: Log level name; defaults to the LOG_LEVEL environment variable
    """
    log_level = (log_level or os.getenv('LOG_LEVEL', 'INFO')).upper()

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(message)s',  # messages are already JSON
        force=True
    )

    if log_level != 'DEBUG':
        logging.getLogger('boto3').setLevel(logging.WARNING)
        logging.getLogger('botocore').setLevel(logging.WARNING)
        logging.getLogger('urllib3').setLevel(logging.WARNING)
