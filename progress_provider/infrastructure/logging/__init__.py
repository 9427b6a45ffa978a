"""Structured logging infrastructure for progress reporting."""

from .structured_logger import StructuredLogger, get_logger, operation_context, node_context
from .context import operation_scope, current_operation
from .setup import setup_logging, setup_simple_logging, get_log_stats

__all__ = [
    'StructuredLogger',
    'get_logger',
    'operation_context',
    'node_context',
    'operation_scope',
    'current_operation',
    'setup_logging',
    'setup_simple_logging',
    'get_log_stats'
]
