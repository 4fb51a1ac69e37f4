"""Centralized logging configuration for cutplan.

Reads logging configuration from config.yaml.
"""

import logging
import sys
from pathlib import Path

import yaml


DEFAULT_LOGGING_SETTINGS = {
    'log_file': 'cutplan.log',
    'console_level': 'WARNING',
    'file_mode': 'w',
    'suppress_matplotlib': True,
    'suppress_root_logger': True,
    'third_party_log_level': 'WARNING',
}

# matplotlib's font manager and PIL's plugin loader are chatty at DEBUG
_NOISY_LOGGER_NAMES = (
    'matplotlib',
    'matplotlib.font_manager',
    'PIL',
    'PIL.PngImagePlugin',
)


def _set_noisy_logger_levels(level: int) -> None:
    """Raise the level of rendering-library loggers so they stay out of the log file."""
    for logger_name in _NOISY_LOGGER_NAMES:
        logging.getLogger(logger_name).setLevel(level)


def _load_logging_settings(config_path: Path | None) -> dict:
    """Load and validate logging settings from config.yaml (defaults when no file is given)."""
    config = {}
    if config_path is not None:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Invalid configuration in {config_path}; expected mapping.")

    logging_config = config.get('logging', {})
    if logging_config is None:
        logging_config = {}
    if not isinstance(logging_config, dict):
        raise ValueError(f"Invalid logging section in {config_path}; expected mapping.")

    settings = DEFAULT_LOGGING_SETTINGS.copy()
    settings.update(logging_config)

    console_level = str(settings['console_level']).upper()
    if not isinstance(getattr(logging, console_level, None), int):
        raise ValueError(f"Invalid logging.console_level '{settings['console_level']}'")
    settings['console_level'] = console_level

    third_party_level = str(settings['third_party_log_level']).upper()
    if not isinstance(getattr(logging, third_party_level, None), int):
        raise ValueError(f"Invalid logging.third_party_log_level '{settings['third_party_log_level']}'")
    settings['third_party_log_level'] = third_party_level

    if settings['file_mode'] not in ('w', 'a'):
        raise ValueError("logging.file_mode must be 'w' or 'a'")
    if not isinstance(settings['suppress_matplotlib'], bool):
        raise ValueError("logging.suppress_matplotlib must be boolean")
    if not isinstance(settings['suppress_root_logger'], bool):
        raise ValueError("logging.suppress_root_logger must be boolean")
    if not isinstance(settings['log_file'], str) or not settings['log_file'].strip():
        raise ValueError("logging.log_file must be a non-empty string")

    return settings


def setup_logging(config_path: Path | None = Path("config.yaml")) -> logging.Logger:
    """
    Configure logging using settings from config.yaml.

    Args:
        config_path: Path to the configuration YAML file, or None for defaults.

    Returns:
        Configured logger instance.
    """
    settings = _load_logging_settings(config_path)
    log_file = settings['log_file']
    console_level = settings['console_level']

    # Create logger
    logger = logging.getLogger("cutplan")
    logger.setLevel(logging.DEBUG)  # Capture everything

    # Avoid adding handlers multiple times if called repeatedly
    if logger.handlers:
        return logger

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    # File handler (DEBUG level - captures everything)
    file_handler = logging.FileHandler(log_file, mode=settings['file_mode'], encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)
    logger.addHandler(file_handler)

    # Console handler (WARNING level by default - only warnings and errors)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, console_level))
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    third_party_level = getattr(logging, settings['third_party_log_level'])

    if settings['suppress_matplotlib']:
        _set_noisy_logger_levels(third_party_level)

    if settings['suppress_root_logger']:
        root_logger = logging.getLogger()
        root_logger.setLevel(third_party_level)

    return logger


def get_logger(name: str = "cutplan") -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (default: "cutplan").

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
