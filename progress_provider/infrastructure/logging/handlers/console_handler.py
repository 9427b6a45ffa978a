"""Console handler for interactive use."""

import logging
import os
import sys
from typing import Optional

from ..formatters import HumanFormatter


def supports_color(stream) -> bool:
    """Whether ANSI colors should be written to ``stream``."""
    isatty = getattr(stream, 'isatty', None)
    if isatty is None or not isatty():
        return False
    return not os.environ.get('NO_COLOR') and os.environ.get('TERM', '') != 'dumb'


class ConsoleHandler(logging.StreamHandler):
    """Stream handler rendering records with the human formatter."""

    def __init__(self,
                 stream=None,
                 use_colors: Optional[bool] = None,
                 show_context: bool = True,
                 level: int = logging.INFO):
        """Initialize console handler.

        Args:
            stream: Output stream (defaults to stderr)
            use_colors: Force color on/off (auto-detect if None)
            show_context: Whether to show operation and progress details
            level: Minimum level written
        """
        stream = stream or sys.stderr
        super().__init__(stream)

        if use_colors is None:
            use_colors = supports_color(stream)

        self.setFormatter(HumanFormatter(use_colors=use_colors, show_context=show_context))
        self.setLevel(level)

    @classmethod
    def from_config(cls, config, level: int = logging.INFO, stream=None) -> 'ConsoleHandler':
        """Build the handler from the ``logging`` section of a Config."""
        return cls(
            stream=stream,
            use_colors=config.get('logging.use_colors'),
            show_context=True,
            level=level
        )
