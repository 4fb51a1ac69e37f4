"""
Tests for logging_config module (logging configuration).
"""
import logging

import pytest

from logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def clean_cutplan_logger():
    """Start every test without handlers and close any handlers it added."""
    logger = logging.getLogger("cutplan")
    logger.handlers.clear()
    root_logger = logging.getLogger()
    original_root_level = root_logger.level
    noisy = {name: logging.getLogger(name).level for name in ('matplotlib', 'PIL')}
    yield logger
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    root_logger.setLevel(original_root_level)
    for name, level in noisy.items():
        logging.getLogger(name).setLevel(level)


def _write_config(tmp_path, body: str):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(body)
    return config_file


def test_setup_logging_default(tmp_path):
    """Test setup_logging with a minimal logging section."""
    config_file = _write_config(tmp_path, f"""
logging:
  log_file: {tmp_path / 'test.log'}
  console_level: WARNING
""")

    result = setup_logging(config_file)

    assert result is not None
    assert result.name == "cutplan"
    assert result.level == logging.DEBUG
    assert len(result.handlers) == 2  # File and console handlers


def test_setup_logging_custom_console_level(tmp_path):
    config_file = _write_config(tmp_path, f"""
logging:
  log_file: {tmp_path / 'test.log'}
  console_level: info
""")

    result = setup_logging(config_file)

    console_handler = [h for h in result.handlers if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)][0]
    assert console_handler.level == logging.INFO


def test_setup_logging_missing_config_section(tmp_path, monkeypatch):
    """Test setup_logging when logging section is missing (uses defaults)."""
    monkeypatch.chdir(tmp_path)
    config_file = _write_config(tmp_path, """
render:
  ratio: 2
""")

    result = setup_logging(config_file)

    assert len(result.handlers) == 2
    file_handler = [h for h in result.handlers if isinstance(h, logging.FileHandler)][0]
    assert file_handler.baseFilename.endswith("cutplan.log")


def test_setup_logging_creates_log_file(tmp_path):
    log_file = tmp_path / "test_output.log"
    config_file = _write_config(tmp_path, f"""
logging:
  log_file: {log_file}
  console_level: WARNING
""")

    logger = setup_logging(config_file)
    logger.info("Test message")

    assert log_file.exists()
    assert "Test message" in log_file.read_text(encoding='utf-8')


def test_setup_logging_prevents_duplicate_handlers(tmp_path):
    config_file = _write_config(tmp_path, f"""
logging:
  log_file: {tmp_path / 'test.log'}
""")

    logger = setup_logging(config_file)
    handler_count_1 = len(logger.handlers)
    setup_logging(config_file)
    handler_count_2 = len(logger.handlers)

    assert handler_count_1 == handler_count_2


def test_setup_logging_file_handler_debug_level(tmp_path):
    config_file = _write_config(tmp_path, f"""
logging:
  log_file: {tmp_path / 'test.log'}
  console_level: ERROR
""")

    result = setup_logging(config_file)

    file_handler = [h for h in result.handlers if isinstance(h, logging.FileHandler)][0]
    assert file_handler.level == logging.DEBUG
    assert "asctime" in file_handler.formatter._fmt


def test_get_logger():
    assert get_logger().name == "cutplan"
    assert get_logger("custom").name == "custom"


def test_setup_logging_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        setup_logging(tmp_path / "nonexistent.yaml")


def test_setup_logging_append_mode_preserves_existing_file(tmp_path):
    log_file = tmp_path / "append.log"
    log_file.write_text("existing line\n")
    config_file = _write_config(tmp_path, f"""
logging:
  log_file: {log_file}
  file_mode: a
""")

    logger = setup_logging(config_file)
    logger.info("new line")

    content = log_file.read_text()
    assert "existing line" in content
    assert "new line" in content


def test_setup_logging_suppresses_rendering_loggers(tmp_path):
    config_file = _write_config(tmp_path, f"""
logging:
  log_file: {tmp_path / 'test.log'}
  third_party_log_level: ERROR
""")

    setup_logging(config_file)

    assert logging.getLogger("matplotlib").level == logging.ERROR
    assert logging.getLogger("PIL").level == logging.ERROR
    assert logging.getLogger().level == logging.ERROR


def test_setup_logging_no_third_party_suppression(tmp_path):
    config_file = _write_config(tmp_path, f"""
logging:
  log_file: {tmp_path / 'test.log'}
  suppress_matplotlib: false
  suppress_root_logger: false
""")
    root_logger = logging.getLogger()
    matplotlib_logger = logging.getLogger("matplotlib")
    original_root_level = root_logger.level
    original_matplotlib_level = matplotlib_logger.level

    setup_logging(config_file)

    assert root_logger.level == original_root_level
    assert matplotlib_logger.level == original_matplotlib_level


@pytest.mark.parametrize("body", [
    "logging:\n  file_mode: invalid\n",
    "logging:\n  console_level: LOUD\n",
    "logging:\n  third_party_log_level: nope\n",
    "logging:\n  suppress_matplotlib: invalid\n",
    "logging:\n  suppress_root_logger: 1\n",
    "logging:\n  log_file: ''\n",
    "logging:\n  - not a mapping\n",
])
def test_setup_logging_invalid_settings_raise(tmp_path, body):
    config_file = _write_config(tmp_path, body)
    with pytest.raises(ValueError):
        setup_logging(config_file)
