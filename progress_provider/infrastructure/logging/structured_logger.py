"""Structured logging with context propagation for progress reporting."""

import logging
import sys
import traceback
from typing import Dict, Any, Optional
from contextvars import ContextVar
from datetime import datetime, timezone

# Context variables for correlation across threads and tasks
operation_context: ContextVar[Optional[str]] = ContextVar('operation', default=None)
node_context: ContextVar[Optional[str]] = ContextVar('node_id', default=None)


class StructuredLogger(logging.Logger):
    """Logger with structured output and context propagation.

    Features:
    - Automatic context injection (operation, node_id)
    - Persistent per-logger context fields
    - Full traceback capture for errors
    """

    def __init__(self, name: str):
        """Initialize structured logger.

        Args:
            name: Logger name (usually __name__)
        """
        super().__init__(name)
        self._context_fields: Dict[str, Any] = {}

    def _log(self, level, msg, args, exc_info=None, extra=None, stack_info=False, **kwargs):
        """Override to add context and structure.

        Enhances log records with:
        - Context from ContextVars
        - Caller supplied ``extra['context']`` fields
        - Traceback capture
        """
        context = {
            'operation': operation_context.get(),
            'node_id': node_context.get(),
            'logger_name': self.name,
            'timestamp': datetime.now(timezone.utc).isoformat(),
            **self._context_fields
        }

        # Remove None values
        context = {k: v for k, v in context.items() if v is not None}

        traceback_str = None
        if extra and isinstance(extra, dict):
            extra = dict(extra)
            context.update(extra.pop('context', {}) or {})
            traceback_str = extra.pop('traceback', None)

        if not traceback_str and exc_info:
            if isinstance(exc_info, BaseException):
                exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
            elif not isinstance(exc_info, tuple):
                exc_info = sys.exc_info()
            if exc_info[0] is not None:
                traceback_str = ''.join(traceback.format_exception(*exc_info))

        if extra is None:
            extra = {}
        extra.update({
            'context': context,
            'traceback': traceback_str
        })

        super()._log(level, msg, args, exc_info=None, extra=extra,
                     stack_info=stack_info, **kwargs)

    def add_context(self, **fields):
        """Add persistent context fields to all future log messages.

        Example:
            logger.add_context(provider='main_window')
        """
        self._context_fields.update(fields)

    def remove_context(self, *keys):
        """Remove persistent context fields."""
        for key in keys:
            self._context_fields.pop(key, None)

    def clear_context(self):
        """Clear all persistent context fields."""
        self._context_fields.clear()

    def log_error_with_context(self, error: Exception, operation: str = None, **context):
        """Log an error with its type, traceback and additional context.

        Args:
            error: The exception that occurred
            operation: Optional operation name for context
            **context: Additional context fields
        """
        error_context = {
            'error_type': type(error).__name__,
            'error_module': type(error).__module__,
            **context
        }
        if operation:
            error_context['operation'] = operation

        self.error(
            f"{type(error).__name__}: {error}",
            exc_info=error,
            extra={'context': error_context}
        )


# Global logger cache
_logger_cache: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """Get or create a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance

    Example:
        from progress_provider.infrastructure.logging import get_logger
        logger = get_logger(__name__)
    """
    if name in _logger_cache:
        return _logger_cache[name]

    # Temporarily set logger class
    original_class = logging.getLoggerClass()
    logging.setLoggerClass(StructuredLogger)

    try:
        logger = logging.getLogger(name)
        _logger_cache[name] = logger
        return logger
    finally:
        logging.setLoggerClass(original_class)
