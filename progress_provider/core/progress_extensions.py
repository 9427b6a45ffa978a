"""Convenience helpers for reporting progress and scoping operations."""

from contextlib import contextmanager
from typing import Any, Optional

from progress_provider.foundations.types import ProgressState
from progress_provider.infrastructure.logging import operation_scope, current_operation
from .hierarchical_progress import HierarchicalProgress, HierarchicalProgressBase


def report_message(progress: HierarchicalProgress,
                   message: Any,
                   state: ProgressState = ProgressState.INDETERMINATE) -> None:
    """Report a message without a progress value."""
    progress.report(progress.report_factory.create_with_state(message, state))


def report_progress(progress: HierarchicalProgress,
                    message: Any,
                    progress_value: float,
                    progress_maximum_value: float,
                    state: ProgressState = ProgressState.NORMAL) -> None:
    """Report a message with a concrete progress value."""
    progress.report(progress.report_factory.create_with_progress(
        message, progress_value, progress_maximum_value, state
    ))


def report_error(progress: HierarchicalProgress, message: Any = None) -> None:
    """
    Report a failure.

    The previous progress value is kept; so is the previous message when
    ``message`` is empty.
    """
    progress.report(progress.report_factory.create_with_state(message, ProgressState.ERROR))


@contextmanager
def progress_scope(parent: HierarchicalProgressBase,
                   blocks_ui: bool = False,
                   operation: Optional[str] = None):
    """
    Create a child operation that is disposed on every exit path.

    Log messages inside the scope are tagged with the operation name and
    the child's progress id.

    Example:
        with progress_scope(provider, blocks_ui=True, operation='import') as progress:
            report_progress(progress, 'Importing', 1, 10)
    """
    progress = parent.create_progress(blocks_ui)
    try:
        with operation_scope(operation or current_operation(), node_id=progress.progress_id):
            yield progress
    finally:
        progress.dispose()
