# progress_provider/core/progress_provider.py
"""Top-level progress provider surfaced to the host UI."""

from typing import Callable, List, Optional

from progress_provider.base import (
    NavigationService,
    NullNavigationService,
    ProgressReportFactory,
    create_report_factory
)
from progress_provider.config import Config, get_config
from progress_provider.foundations.types import ProgressReport
from progress_provider.infrastructure.logging import get_logger
from .hierarchical_progress import HierarchicalProgress, HierarchicalProgressBase

logger = get_logger(__name__)

PropertyChangedHandler = Callable[['ProgressProvider', str], None]


class ProgressProvider(HierarchicalProgressBase):
    """
    Root of the progress tree for one application surface.

    Features:
    - Derives is_operation_in_progress, is_ui_blocked and status from the tree
    - Notifies subscribers with the name of each property that changed
    - Enables/disables the navigation service on UI-blocking transitions only
    """

    PROPERTY_NAMES = ('is_operation_in_progress', 'is_ui_blocked', 'status')

    def __init__(self,
                 navigation_service: Optional[NavigationService] = None,
                 keep_progress_list_ordered: Optional[bool] = None,
                 report_factory: Optional[ProgressReportFactory] = None,
                 config: Optional[Config] = None):
        """
        Initialize the progress provider.

        Args:
            navigation_service: Collaborator that blocks/unblocks the UI
            keep_progress_list_ordered: Ordering policy of the top-level list
                (defaults to progress.keep_root_list_ordered)
            report_factory: Report factory (defaults to the factory for
                progress.message_type)
            config: Configuration (defaults to the global configuration)
        """
        config = config or get_config()

        if keep_progress_list_ordered is None:
            keep_progress_list_ordered = config.get('progress.keep_root_list_ordered', False)
        if report_factory is None:
            report_factory = create_report_factory(config.get('progress.message_type', 'text'))

        super().__init__(
            keep_progress_list_ordered,
            report_factory,
            keep_child_list_ordered=config.get('progress.keep_child_list_ordered', True)
        )

        self.navigation_service = navigation_service or NullNavigationService()
        self._is_navigation_service_blocked = False

        self._is_operation_in_progress = False
        self._is_ui_blocked = False
        self._status: Optional[ProgressReport] = None

        self._property_changed_handlers: List[PropertyChangedHandler] = []

    @property
    def is_operation_in_progress(self) -> bool:
        """Whether an operation is running (e.g. to show a progress bar)."""
        return self._is_operation_in_progress

    @property
    def is_ui_blocked(self) -> bool:
        """Whether any running operation is blocking the UI."""
        return self._is_ui_blocked

    @property
    def status(self) -> Optional[ProgressReport]:
        """Aggregate status of the running operations, if any."""
        return self._status

    @property
    def active_child_operations(self) -> List[HierarchicalProgress]:
        """Handles of the top-level operations still running."""
        return [node.progress for node in self.active_child_nodes]

    def subscribe(self, handler: PropertyChangedHandler) -> None:
        """
        Register a property-changed handler.

        Args:
            handler: Function(provider, property_name)
        """
        self._property_changed_handlers.append(handler)

    def unsubscribe(self, handler: PropertyChangedHandler) -> None:
        """Remove a property-changed handler."""
        try:
            self._property_changed_handlers.remove(handler)
        except ValueError:
            pass

    def create_progress(self, blocks_ui: bool = False) -> HierarchicalProgress:
        """
        Create and register a long running operation.

        The operation immediately reports the empty indeterminate status so
        it shows up as in progress.
        """
        child = super().create_progress(blocks_ui)
        child.report(self.report_factory.create())
        return child

    def dispose(self) -> None:
        """Forget all operations and release the UI if it was blocked."""
        with self._node_lock:
            super().dispose()
            self._on_status_changed()

    def _on_status_changed(self) -> None:
        """Re-compute the surfaced properties from the operations in progress."""
        is_operation_in_progress = bool(self._active_child_nodes)
        is_ui_blocked = is_operation_in_progress and any(
            node.is_blocking_ui for node in self._active_child_nodes
        )

        self._set_property('is_operation_in_progress', is_operation_in_progress)
        self._set_property('is_ui_blocked', is_ui_blocked)
        if self._set_property('status', self.calculate_aggregate_report()):
            logger.debug(
                "Status changed",
                extra={'context': {'active_operations': len(self._active_child_nodes)},
                       'report': self._status}
            )

        if self._is_ui_blocked != self._is_navigation_service_blocked:
            blocked = self._is_ui_blocked
            logger.info(f"UI {'blocked' if blocked else 'unblocked'} by progress operations")
            self.navigation_service.enable(not blocked)
            self._is_navigation_service_blocked = blocked

    def _set_property(self, name: str, value) -> bool:
        attribute = f"_{name}"
        if getattr(self, attribute) == value:
            return False
        setattr(self, attribute, value)
        self._notify_property_changed(name)
        return True

    def _notify_property_changed(self, name: str) -> None:
        for handler in list(self._property_changed_handlers):
            try:
                handler(self, name)
            except Exception as e:
                logger.error(f"Property changed handler error for {name}: {e}")
