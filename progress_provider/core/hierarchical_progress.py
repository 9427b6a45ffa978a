# progress_provider/core/hierarchical_progress.py
"""Hierarchical progress tracking: aggregation engine and progress handles."""

import inspect
import threading
import uuid
import weakref
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from progress_provider.base import ProgressReportFactory, TextProgressReportFactory
from progress_provider.foundations.types import (
    ProgressReport,
    ProgressState,
    InvalidProgressReportError,
    ProgressNotSupportedError,
    ProgressDisposedError
)
from progress_provider.infrastructure.logging import get_logger
from .cancellation import CancellationSource
from .progress_node import ProgressNode

logger = get_logger(__name__)

ReportHandler = Callable[['HierarchicalProgress', ProgressReport], None]
UnregisterHandler = Callable[['HierarchicalProgress'], None]


class HierarchicalProgressBase(ABC):
    """
    Maintains the child operations of one parent and their aggregate status.

    Two lists are kept: every child created since the last batch reset and
    the subset still active. Completed children stay in the first list so
    they keep counting at full weight while their siblings run; once the
    last active child completes both lists are emptied together.

    All list mutation for one tree happens under its re-entrant lock. Locks
    are taken child before parent since reports flow upward.
    """

    def __init__(self,
                 keep_progress_list_ordered: bool,
                 report_factory: Optional[ProgressReportFactory] = None,
                 keep_child_list_ordered: bool = True):
        """
        Initialize the progress tree.

        Args:
            keep_progress_list_ordered: Move a reporting child to the end of
                the active list, so the aggregate message is the most
                recently reported one
            report_factory: Factory used to build aggregate reports
            keep_child_list_ordered: Ordering policy handed to child handles
        """
        self.keep_progress_list_ordered = keep_progress_list_ordered
        self.keep_child_list_ordered = keep_child_list_ordered
        self.report_factory = report_factory or TextProgressReportFactory()

        self._child_nodes: List[ProgressNode] = []
        self._active_child_nodes: List[ProgressNode] = []
        self._node_lock = threading.RLock()

    @property
    def active_child_nodes(self) -> List[ProgressNode]:
        """Snapshot of the child operations not yet completed."""
        # No lock: parents read this while holding their own lock
        return list(self._active_child_nodes)

    @property
    def child_nodes(self) -> List[ProgressNode]:
        """Snapshot of all child operations in the current batch."""
        return list(self._child_nodes)

    @property
    def has_active_children(self) -> bool:
        return bool(self._active_child_nodes)

    def create_progress(self, blocks_ui: bool = False) -> 'HierarchicalProgress':
        """
        Create and register a child operation.

        Args:
            blocks_ui: True if the UI should be blocked while the child is active

        Returns:
            Handle used by the child operation to report its progress
        """
        with self._node_lock:
            child = HierarchicalProgress(
                self.on_child_report,
                self.on_child_unregister,
                self.report_factory,
                keep_progress_list_ordered=self.keep_child_list_ordered
            )
            node = ProgressNode(progress=child, blocks_ui=blocks_ui)
            self._child_nodes.append(node)
            self._active_child_nodes.append(node)

        logger.debug(
            "Child progress created",
            extra={'context': {'node_id': child.progress_id, 'blocks_ui': blocks_ui}}
        )
        return child

    def calculate_aggregate_report(self) -> Optional[ProgressReport]:
        """
        Recompute the aggregate status from the child operations.

        Returns:
            Aggregate report, or None when there is nothing to show yet
            (no active child, or a child of the batch has not reported)
        """
        with self._node_lock:
            if not self._active_child_nodes:
                return None

            if not all(node.has_reported for node in self._child_nodes):
                return None

            aggregate_state = max(node.last_reported_status.state for node in self._child_nodes)
            message = self._active_child_nodes[-1].last_reported_status.message

            all_active_have_value = all(
                node.last_reported_status.progress_value is not None
                for node in self._active_child_nodes
            )
            if all_active_have_value:
                denominator = sum(node.last_reported_status.progress_maximum_value
                                  for node in self._child_nodes)
                if denominator > 0:
                    active_ids = {id(node) for node in self._active_child_nodes}
                    progress_value = 0.0
                    for node in self._child_nodes:
                        status = node.last_reported_status
                        if id(node) in active_ids:
                            numerator = status.progress_value
                        else:
                            numerator = status.progress_maximum_value
                        progress_value += numerator / denominator

                    return self.report_factory.create_with_progress(
                        message, progress_value, 1.0, aggregate_state
                    )

            return self.report_factory.create_with_state(message, aggregate_state)

    def on_child_report(self, sender: 'HierarchicalProgress', value: ProgressReport) -> None:
        """
        Handle a progress report from a child operation.

        Reports from children that are no longer registered are ignored;
        they race with disposal under concurrent use.
        """
        if value is None:
            raise InvalidProgressReportError("value must not be None")

        with self._node_lock:
            node = self._find_node(sender)
            if node is None:
                logger.debug(
                    "Ignoring report from unregistered progress",
                    extra={'context': {'node_id': getattr(sender, 'progress_id', None)}}
                )
                return

            # Put sender at the end of the pile
            if self.keep_progress_list_ordered and self._remove_active(node):
                self._active_child_nodes.append(node)

            node.last_reported_status = value
            self._on_status_changed()

    def on_child_unregister(self, sender: 'HierarchicalProgress') -> None:
        """Handle completion of a child operation."""
        with self._node_lock:
            node = self._find_node(sender)
            if node is None:
                return

            self._remove_active(node)

            if not self._active_child_nodes:
                # Last active child: start the next batch from scratch
                logger.debug(
                    "All child operations completed, resetting batch",
                    extra={'context': {'completed_children': len(self._child_nodes)}}
                )
                self._child_nodes.clear()

            self._on_status_changed()

    @abstractmethod
    def _on_status_changed(self) -> None:
        """Called whenever the aggregate status needs to be recomputed."""
        pass

    def _find_node(self, progress: 'HierarchicalProgress') -> Optional[ProgressNode]:
        for node in self._child_nodes:
            if node.progress is progress:
                return node
        return None

    def _remove_active(self, node: ProgressNode) -> bool:
        for index, active in enumerate(self._active_child_nodes):
            if active is node:
                del self._active_child_nodes[index]
                return True
        return False

    def dispose(self) -> None:
        """Forget all child operations."""
        with self._node_lock:
            self._child_nodes.clear()
            self._active_child_nodes.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()
        return False


def _weak_callback(callback: Callable) -> Callable[[], Optional[Callable]]:
    """Reference a callback without keeping its owner alive."""
    if inspect.ismethod(callback):
        return weakref.WeakMethod(callback)
    return lambda: callback


class HierarchicalProgress(HierarchicalProgressBase):
    """
    Progress handle given to a unit of work.

    The handle reports its own status to its parent and is itself a
    progress tree for the child operations it spawns. While it has active
    children its value comes from aggregation only.
    """

    def __init__(self,
                 report_handler: ReportHandler,
                 unregister_handler: UnregisterHandler,
                 report_factory: Optional[ProgressReportFactory] = None,
                 keep_progress_list_ordered: bool = True):
        """
        Initialize the progress handle.

        Args:
            report_handler: Called with (handle, report) for each reported value
            unregister_handler: Called with the handle once it completes
            report_factory: Factory used to build reports
            keep_progress_list_ordered: Ordering policy for this handle's children
        """
        super().__init__(
            keep_progress_list_ordered,
            report_factory,
            keep_child_list_ordered=keep_progress_list_ordered
        )
        self.progress_id = uuid.uuid4().hex[:8]
        self._report_handler = _weak_callback(report_handler)
        self._unregister_handler = _weak_callback(unregister_handler)
        self._last_reported_status: Optional[ProgressReport] = None
        self._cancellation_source: Optional[CancellationSource] = None
        self._is_completed = False
        self._is_disposed = False

    @property
    def last_reported_status(self) -> Optional[ProgressReport]:
        return self._last_reported_status

    @property
    def is_completed(self) -> bool:
        return self._is_completed

    @property
    def is_disposed(self) -> bool:
        return self._is_disposed

    @property
    def cancellation_source(self) -> CancellationSource:
        """Cancellation signal for this operation, created on first use."""
        with self._node_lock:
            if self._is_disposed:
                raise ProgressDisposedError(f"Progress {self.progress_id} has been disposed")
            if self._cancellation_source is None:
                self._cancellation_source = CancellationSource()
            return self._cancellation_source

    def report(self, value: ProgressReport) -> None:
        """
        Report a progress update.

        An ERROR report without a value keeps the previous value (and the
        previous message unless a new one is given) so a failure does not
        erase the progress made so far.

        Raises:
            InvalidProgressReportError: value is None
            ProgressNotSupportedError: value carries a progress value while
                this operation has active children
        """
        if value is None:
            raise InvalidProgressReportError("value must not be None")

        with self._node_lock:
            if value.progress_value is not None and self._active_child_nodes:
                raise ProgressNotSupportedError(
                    f"Progress {self.progress_id} has active child operations; "
                    "its value is computed from them and cannot be reported directly"
                )

            previous = self._last_reported_status
            if (value.state == ProgressState.ERROR
                    and value.progress_value is None
                    and previous is not None
                    and previous.progress_value is not None):
                message = value.message
                if self.report_factory.is_empty_message(message):
                    message = previous.message
                value = self.report_factory.create_with_progress(
                    message,
                    previous.progress_value,
                    previous.progress_maximum_value,
                    ProgressState.ERROR
                )

            self._forward(value)

    def report_completed(self) -> None:
        """
        Mark the operation as completed and unregister it from its parent.

        The terminal status reports the full maximum so the operation keeps
        counting at full weight while its siblings are still running.
        The parent is released even when the terminal report fails.
        Completing twice has no effect.
        """
        with self._node_lock:
            if self._is_completed:
                return

            previous = self._last_reported_status
            if previous is not None and previous.progress_value is not None:
                maximum = previous.progress_maximum_value
            else:
                maximum = 1.0
            if previous is not None and previous.state == ProgressState.ERROR:
                state = ProgressState.ERROR
            else:
                state = ProgressState.NORMAL
            message = previous.message if previous is not None else self.report_factory.create().message

            try:
                self._forward(self.report_factory.create_with_progress(message, maximum, maximum, state))
            finally:
                self._is_completed = True

                logger.debug(
                    "Progress completed",
                    extra={'context': {'node_id': self.progress_id}, 'report': self._last_reported_status}
                )

                handler = self._unregister_handler()
                if handler is not None:
                    handler(self)

    def dispose(self) -> None:
        """Complete the operation if needed and release its resources."""
        with self._node_lock:
            if self._is_disposed:
                return
            self._is_disposed = True

            try:
                self.report_completed()
            finally:
                if self._cancellation_source is not None:
                    self._cancellation_source.close()
                    self._cancellation_source = None

                super().dispose()

    def _forward(self, value: ProgressReport) -> None:
        """Record a report and hand it to the parent."""
        if self._is_completed:
            logger.debug(
                "Ignoring report on completed progress",
                extra={'context': {'node_id': self.progress_id}}
            )
            return

        self._last_reported_status = value
        handler = self._report_handler()
        if handler is not None:
            handler(self, value)

    def _on_status_changed(self) -> None:
        """Propagate the new aggregate to the parent."""
        status = self.calculate_aggregate_report()
        if status is None and not self._active_child_nodes:
            # Batch reset: the parent still has to drop blocking descendants
            status = self._last_reported_status
        if status is not None:
            self._forward(status)
