"""Rotating file handler for progress logs."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from ..formatters import JsonFormatter, HumanFormatter


class FileHandler(RotatingFileHandler):
    """Size-rotated log file written as JSON lines or plain text.

    The JSON form carries the progress payload of each status record;
    the plain form is the console layout without colors.
    """

    def __init__(self,
                 filename: str,
                 max_bytes: int = 10 * 1024 * 1024,
                 backup_count: int = 5,
                 use_json: bool = True):
        log_path = Path(filename)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        super().__init__(
            filename=str(log_path),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )

        self.use_json = use_json
        self.setFormatter(JsonFormatter() if use_json else HumanFormatter(use_colors=False))
        self.setLevel(logging.DEBUG)

    @classmethod
    def from_config(cls, config, filename: str) -> 'FileHandler':
        """Build the handler from the ``logging`` section of a Config."""
        return cls(
            filename=filename,
            max_bytes=config.get('logging.max_file_size', 10 * 1024 * 1024),
            backup_count=config.get('logging.backup_count', 5),
            use_json=config.get('logging.json_file_format', True)
        )
