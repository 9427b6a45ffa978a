"""Abstract base class for progress report factories."""

from abc import ABC, abstractmethod
from typing import Any

from progress_provider.foundations.types import (
    ProgressReport,
    ProgressState,
    is_null_or_empty
)


class ProgressReportFactory(ABC):
    """Abstract factory for progress reports.

    Isolates the aggregation logic from the message payload type. The
    aggregation engine only ever builds reports through a factory, so a
    richer message type plugs in by providing its own factory.
    """

    @abstractmethod
    def create(self) -> ProgressReport:
        """Create the empty, indeterminate report used for new operations."""
        pass

    @abstractmethod
    def create_with_state(self, message: Any, state: ProgressState) -> ProgressReport:
        """Create a report without a progress value.

        Args:
            message: Message payload
            state: Progress state
        """
        pass

    @abstractmethod
    def create_with_progress(self,
                             message: Any,
                             progress_value: float,
                             progress_maximum_value: float,
                             state: ProgressState) -> ProgressReport:
        """Create a report with a concrete progress value.

        Args:
            message: Message payload
            progress_value: Current progress value (finite)
            progress_maximum_value: Value representing completion
            state: Progress state
        """
        pass

    def is_empty_message(self, message: Any) -> bool:
        """Check whether a message should be treated as absent."""
        return is_null_or_empty(message)


class ObjectProgressReportFactory(ProgressReportFactory):
    """Factory for reports carrying any message object (None when empty)."""

    def create(self) -> ProgressReport:
        return ProgressReport(message=None, state=ProgressState.INDETERMINATE)

    def create_with_state(self, message: Any, state: ProgressState) -> ProgressReport:
        return ProgressReport(message=message, state=state)

    def create_with_progress(self,
                             message: Any,
                             progress_value: float,
                             progress_maximum_value: float,
                             state: ProgressState) -> ProgressReport:
        return ProgressReport(
            message=message,
            progress_value=progress_value,
            progress_maximum_value=progress_maximum_value,
            state=state
        )


class TextProgressReportFactory(ObjectProgressReportFactory):
    """Factory for plain-text messages.

    The empty message is the empty string; None becomes the empty string
    and other payloads are converted with ``str``.
    """

    def create(self) -> ProgressReport:
        return ProgressReport(message="", state=ProgressState.INDETERMINATE)

    def create_with_state(self, message: Any, state: ProgressState) -> ProgressReport:
        return super().create_with_state(self._check_message(message), state)

    def create_with_progress(self,
                             message: Any,
                             progress_value: float,
                             progress_maximum_value: float,
                             state: ProgressState) -> ProgressReport:
        return super().create_with_progress(
            self._check_message(message), progress_value, progress_maximum_value, state
        )

    def _check_message(self, message: Any) -> str:
        if message is None:
            return ""
        return str(message)


_FACTORIES = {
    'text': TextProgressReportFactory,
    'object': ObjectProgressReportFactory,
}


def create_report_factory(message_type: str = 'text') -> ProgressReportFactory:
    """Build the report factory registered for a message type.

    Args:
        message_type: 'text' or 'object'

    Returns:
        ProgressReportFactory instance
    """
    try:
        return _FACTORIES[message_type]()
    except KeyError:
        raise ValueError(
            f"Unknown message type: {message_type}. Available: {sorted(_FACTORIES)}"
        ) from None
