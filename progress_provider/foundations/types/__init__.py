"""Foundation types - core data structures with no dependencies."""

from .progress_types import (
    ProgressState,
    ProgressReport,
    is_null_or_empty,
    ProgressError,
    InvalidProgressReportError,
    ProgressNotSupportedError,
    ProgressDisposedError,
    OperationCancelledError
)

__all__ = [
    'ProgressState',
    'ProgressReport',
    'is_null_or_empty',
    'ProgressError',
    'InvalidProgressReportError',
    'ProgressNotSupportedError',
    'ProgressDisposedError',
    'OperationCancelledError'
]
