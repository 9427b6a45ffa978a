"""Setup and configuration for the structured logging system."""

import logging
from typing import Optional, Dict, Any

from .structured_logger import get_logger
from .handlers import ConsoleHandler, FileHandler


def setup_logging(config=None,
                  log_file: Optional[str] = None,
                  console: Optional[bool] = None,
                  log_level: Optional[str] = None):
    """Configure the structured logging system.

    Explicit arguments win over the ``logging`` section of the
    configuration.

    Args:
        config: Config instance (defaults to the global configuration)
        log_file: Optional log file path
        console: Whether to enable console logging
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    if config is None:
        from progress_provider.config import get_config
        config = get_config()

    log_level = log_level or config.get('logging.level', 'INFO')
    if console is None:
        console = config.get('logging.console', True)
    if log_file is None:
        log_file = config.get('logging.log_file')

    root_logger = logging.getLogger()
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if console:
        console_handler = ConsoleHandler.from_config(config, level=level)
        root_logger.addHandler(console_handler)

    if log_file:
        file_handler = FileHandler.from_config(config, str(log_file))
        root_logger.addHandler(file_handler)

    logger = get_logger(__name__)
    logger.info(
        "Structured logging system initialized",
        extra={
            'context': {
                'log_level': log_level,
                'handlers': {
                    'console': bool(console),
                    'file': str(log_file) if log_file else None
                }
            }
        }
    )


def setup_simple_logging(log_level: str = 'INFO'):
    """Setup console-only logging for testing and debugging.

    Args:
        log_level: Minimum log level
    """
    root_logger = logging.getLogger()
    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = ConsoleHandler(level=level)
    root_logger.addHandler(console_handler)


def get_log_stats() -> Dict[str, Any]:
    """Describe the handlers attached to the root logger."""
    stats = {}

    for handler in logging.getLogger().handlers:
        if isinstance(handler, FileHandler):
            stats['file'] = {
                'filename': handler.baseFilename,
                'max_bytes': handler.maxBytes,
                'backup_count': handler.backupCount,
                'json': handler.use_json
            }
        elif isinstance(handler, ConsoleHandler):
            stats['console'] = {'level': logging.getLevelName(handler.level)}

    return stats
