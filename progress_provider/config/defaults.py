# progress_provider/config/defaults.py
"""Default configuration values for progress reporting and logging."""

from pathlib import Path

CONFIG_ENV_VAR = 'PROGRESS_PROVIDER_CONFIG'
CONFIG_FILE_NAME = 'progress_provider.yml'
USER_CONFIG_FILE = Path.home() / '.progress_provider' / 'config.yml'

# Progress tree behaviour
PROGRESS = {
    'keep_child_list_ordered': True,   # Handles: most recently updated child last
    'keep_root_list_ordered': False,   # Root provider keeps creation order
    'message_type': 'text',            # 'text' or 'object'
}

# Logging configuration
LOGGING = {
    'level': 'INFO',
    'console': True,
    'use_colors': None,                # Auto-detect from the stream
    'log_file': None,                  # No file logging unless configured
    'max_file_size': 10 * 1024 * 1024, # 10MB
    'backup_count': 5,
    'json_file_format': True,
}
