"""
Core progress aggregation engine.

- HierarchicalProgressBase: child bookkeeping and aggregate computation
- HierarchicalProgress: handle given to a unit of work
- ProgressProvider: root surfaced to the UI
- CancellationSource: cooperative cancellation signal of a handle

Usage:
    from progress_provider.core import ProgressProvider, report_progress

    provider = ProgressProvider(navigation_service)
    with provider.create_progress(blocks_ui=True) as progress:
        report_progress(progress, 'Loading', 3, 10)
"""

from .cancellation import CancellationSource
from .progress_node import ProgressNode
from .hierarchical_progress import HierarchicalProgressBase, HierarchicalProgress
from .progress_provider import ProgressProvider
from .progress_extensions import (
    report_message,
    report_progress,
    report_error,
    progress_scope
)

__all__ = [
    'CancellationSource',
    'ProgressNode',
    'HierarchicalProgressBase',
    'HierarchicalProgress',
    'ProgressProvider',
    'report_message',
    'report_progress',
    'report_error',
    'progress_scope',
]
