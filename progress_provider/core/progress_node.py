"""Node in the progress hierarchy."""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from progress_provider.foundations.types import ProgressReport

if TYPE_CHECKING:
    from .hierarchical_progress import HierarchicalProgress


@dataclass(eq=False)
class ProgressNode:
    """One child operation tracked by a progress tree.

    Nodes are compared by identity; two nodes with equal fields are still
    distinct operations.
    """
    progress: 'HierarchicalProgress'
    blocks_ui: bool = False
    last_reported_status: Optional[ProgressReport] = None

    @property
    def is_blocking_ui(self) -> bool:
        """Own flag or any still-active descendant blocking the UI."""
        if self.blocks_ui:
            return True
        return any(node.is_blocking_ui for node in self.progress.active_child_nodes)

    @property
    def has_reported(self) -> bool:
        return self.last_reported_status is not None
