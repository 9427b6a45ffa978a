# progress_provider/foundations/types/progress_types.py
"""Core data structures and enums for hierarchical progress reporting.

This module defines the value types every layer of the progress tree
exchanges: the ordered progress state, the immutable progress report and
the exception hierarchy.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional


class ProgressState(IntEnum):
    """State of a progress operation.

    Ordinal order matters: an aggregate takes the maximum state of its
    children, so a single ERROR escalates the whole aggregate.
    """
    NONE = 0            # No progress to show
    INDETERMINATE = 1   # Running, percentage unknown (spinner)
    NORMAL = 2          # Running with a known percentage
    ERROR = 3           # Failed or reporting a problem


def _finite(name: str, value: Any) -> float:
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        raise InvalidProgressReportError(f"{name} must be a finite number, got {value!r}")
    return number


@dataclass(frozen=True)
class ProgressReport:
    """Immutable snapshot of the last status reported by one progress node.

    Construction defaults:
    no arguments gives an indeterminate report, a message alone gives an
    indeterminate report and a message with a value gives a normal report.
    """
    message: Any = None
    progress_value: Optional[float] = None
    progress_maximum_value: float = 1.0     # Only meaningful with a value
    state: Optional[ProgressState] = None

    def __post_init__(self):
        """Validate the value and resolve the default state."""
        if self.progress_value is not None:
            object.__setattr__(self, 'progress_value', _finite('progress_value', self.progress_value))
        if self.progress_maximum_value is not None:
            object.__setattr__(self, 'progress_maximum_value',
                               _finite('progress_maximum_value', self.progress_maximum_value))

        if self.state is None:
            state = ProgressState.NORMAL if self.progress_value is not None else ProgressState.INDETERMINATE
        else:
            state = ProgressState(self.state)
        object.__setattr__(self, 'state', state)

    @property
    def has_progress_value(self) -> bool:
        """Whether this report carries a concrete progress value."""
        return self.progress_value is not None

    @property
    def fraction(self) -> Optional[float]:
        """Progress as a fraction of the maximum, if determinate."""
        if self.progress_value is None or self.progress_maximum_value == 0:
            return None
        return self.progress_value / self.progress_maximum_value

    def to_dict(self):
        """Convert to dictionary for logging and display layers."""
        return {
            'message': self.message,
            'progress_value': self.progress_value,
            'progress_maximum_value': self.progress_maximum_value if self.progress_value is not None else None,
            'state': self.state.name.lower(),
        }


def is_null_or_empty(message: Any) -> bool:
    """Check whether a message carries no content (None or empty string)."""
    if message is None:
        return True
    if isinstance(message, str):
        return message == ""
    return False


# Exception classes for progress operations
class ProgressError(Exception):
    """Base exception for progress operations."""
    pass


class InvalidProgressReportError(ProgressError, ValueError):
    """Raised when a report is missing or carries a non-finite value."""
    pass


class ProgressNotSupportedError(ProgressError):
    """Raised when a node with active children reports a concrete value.

    Such a node's value is owned by aggregation; a manual value would be
    overwritten on the next recomputation.
    """
    pass


class ProgressDisposedError(ProgressError):
    """Raised when a disposed progress handle is used."""
    pass


class OperationCancelledError(ProgressError):
    """Raised by work that observes a cancellation request."""
    pass
