# munchausen/core/logging_setup.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List

LAUNCHER_LOGGER = "munchausen"

LOG_LEVEL_STRINGS = {
    'CRITICAL': logging.CRITICAL,
    'ERROR': logging.ERROR,
    'WARNING': logging.WARNING,
    'INFO': logging.INFO,
    'DEBUG': logging.DEBUG,
    'NOTSET': logging.NOTSET,
}

# Define formatter types for different use cases
FORMATTERS = {
    # Standard formatter - concise but with enough context
    'standard': logging.Formatter('%(asctime)s - %(levelname)s - %(message)s',
                                  datefmt='%H:%M:%S'),

    # Verbose formatter - includes module name for debugging
    'verbose': logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                                datefmt='%Y-%m-%d %H:%M:%S'),

    # Debug formatter - detailed with timestamp and call location
    'debug': logging.Formatter('%(asctime)s.%(msecs)03d - %(levelname)s - %(name)s - %(message)s',
                              datefmt='%Y-%m-%d %H:%M:%S'),
}

_installed_handlers: List[logging.Handler] = []


def setup_logging(config_loader, cmd_log_level=None, stream=None) -> logging.Logger:
    """
    Configures logging for the launcher.

    Only the ``munchausen`` logger hierarchy is configured; the root logger
    is left to the launched application. Console output goes to stderr
    because stdout belongs to the application.

    Args:
        config_loader: The config loader instance
        cmd_log_level: Optional log level override
        stream: Console stream, stderr by default

    Returns:
        The configured launcher logger
    """
    if cmd_log_level is not None:
        log_level_str = str(cmd_log_level).upper()
    else:
        log_level_str = str(config_loader.get('logging.level', 'WARNING')).upper()

    log_level = LOG_LEVEL_STRINGS.get(log_level_str, logging.WARNING)  # Default to WARNING

    launcher_logger = logging.getLogger(LAUNCHER_LOGGER)
    launcher_logger.setLevel(logging.DEBUG)
    launcher_logger.propagate = False

    # Replace handlers left by a previous setup
    for handler in _installed_handlers:
        launcher_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(FORMATTERS['verbose'] if log_level <= logging.DEBUG else FORMATTERS['standard'])
    launcher_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    log_file = config_loader.get('logging.file')
    if log_file:
        log_dir = os.path.dirname(str(log_file))
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        # Max 10MB per file, keep 3 backup files
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,
            backupCount=3,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(FORMATTERS['debug'])
        launcher_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    launcher_logger.debug(f"Launcher logging level: {log_level_str}{f', file: {log_file}' if log_file else ''}")
    return launcher_logger
