"""Human-readable formatter for console output."""

import logging
from datetime import datetime


class HumanFormatter(logging.Formatter):
    """Format log records for human readability with colors and structure.

    Features:
    - Color coding by log level
    - Operation and node context display
    - Compact progress summary for status records
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[0m',        # Default
        'WARNING': '\033[93m',    # Yellow
        'ERROR': '\033[91m',      # Red
        'CRITICAL': '\033[95m',   # Magenta
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    def __init__(self, use_colors: bool = True, show_context: bool = True):
        """Initialize formatter.

        Args:
            use_colors: Whether to use ANSI colors
            show_context: Whether to show context information
        """
        super().__init__()
        self.use_colors = use_colors
        self.show_context = show_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human reading."""
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')

        if self.use_colors:
            level_color = self.COLORS.get(record.levelname, '')
            reset = self.RESET
            bold = self.BOLD
            dim = self.DIM
        else:
            level_color = reset = bold = dim = ''

        level = f"{level_color}{record.levelname:8}{reset}"
        context_str = self._format_context(record) if self.show_context else ''
        logger_name = self._shorten_logger_name(record.name)

        parts = [
            f"{dim}{timestamp}{reset}",
            level,
            f"{dim}[{logger_name}]{reset}",
        ]
        if context_str:
            parts.append(f"{bold}{context_str}{reset}")
        parts.append(record.getMessage())
        report_str = self._format_report(record) if self.show_context else ''
        if report_str:
            parts.append(f"{dim}{report_str}{reset}")

        output = ' '.join(parts)

        tb = getattr(record, 'traceback', None)
        if not tb and record.exc_info:
            tb = self.formatException(record.exc_info)
        if tb:
            if self.use_colors:
                tb_lines = tb.strip().split('\n')
                output += '\n' + '\n'.join(f"  {level_color}{line}{reset}" for line in tb_lines)
            else:
                output += f"\n{tb}"

        return output

    def _format_context(self, record: logging.LogRecord) -> str:
        """Format operation and node context as a compact prefix."""
        context = getattr(record, 'context', None)
        if not context:
            return ''

        parts = []
        if context.get('operation'):
            parts.append(f"op:{context['operation']}")
        if context.get('node_id'):
            parts.append(f"node:{context['node_id']}")

        return f"[{' | '.join(parts)}]" if parts else ''

    def _format_report(self, record: logging.LogRecord) -> str:
        """Summarize an attached progress report, e.g. ``(42% normal)``."""
        report = getattr(record, 'report', None)
        if report is None:
            return ''

        fraction = report.fraction
        if fraction is None:
            return f"({report.state.name.lower()})"
        return f"({fraction:.0%} {report.state.name.lower()})"

    def _shorten_logger_name(self, name: str, max_length: int = 20) -> str:
        """Shorten a dotted logger name, keeping the last components."""
        if len(name) <= max_length:
            return name

        components = name.split('.')
        shortened = components[-1]
        for component in reversed(components[:-1]):
            candidate = f"{component}.{shortened}"
            if len(candidate) > max_length:
                break
            shortened = candidate
        return shortened[-max_length:]
