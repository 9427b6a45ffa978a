"""Abstract interface for the UI-blocking collaborator."""

from abc import ABC, abstractmethod


class NavigationService(ABC):
    """Service that enables or disables user interaction with the host UI.

    The progress provider calls ``enable`` only when its UI-blocked state
    changes, so implementations see one call per transition.
    """

    @abstractmethod
    def enable(self, enabled: bool) -> None:
        """Enable (True) or disable (False) user interaction.

        Implementations must not block; hand expensive UI work off to the
        UI thread.
        """
        pass


class NullNavigationService(NavigationService):
    """Navigation service that ignores every call."""

    def enable(self, enabled: bool) -> None:
        pass
