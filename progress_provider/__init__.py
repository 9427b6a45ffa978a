"""Hierarchical progress reporting with aggregate status for display."""

from .foundations.types import (
    ProgressState,
    ProgressReport,
    ProgressError,
    InvalidProgressReportError,
    ProgressNotSupportedError,
    ProgressDisposedError,
    OperationCancelledError
)
from .base import (
    ProgressReportFactory,
    ObjectProgressReportFactory,
    TextProgressReportFactory,
    NavigationService
)
from .core import (
    CancellationSource,
    HierarchicalProgress,
    ProgressProvider,
    report_message,
    report_progress,
    report_error,
    progress_scope
)

__version__ = "1.0.0"

__all__ = [
    'ProgressState',
    'ProgressReport',
    'ProgressError',
    'InvalidProgressReportError',
    'ProgressNotSupportedError',
    'ProgressDisposedError',
    'OperationCancelledError',
    'ProgressReportFactory',
    'ObjectProgressReportFactory',
    'TextProgressReportFactory',
    'NavigationService',
    'CancellationSource',
    'HierarchicalProgress',
    'ProgressProvider',
    'report_message',
    'report_progress',
    'report_error',
    'progress_scope',
]
