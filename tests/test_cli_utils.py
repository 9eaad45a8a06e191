import logging

import click
import pytest

from vintlang.cli.utils import configure_logging, format_error, get_env_flag, get_env_int


@pytest.fixture
def restore_logging():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.mark.parametrize("value,expected", [("1", True), ("TRUE", True), ("yes", True), ("0", False), ("off", False)])
def test_get_env_flag(monkeypatch, value, expected):
    monkeypatch.setenv("VINTLANG_TEST_FLAG", value)
    assert get_env_flag("VINTLANG_TEST_FLAG") is expected


def test_get_env_flag_default(monkeypatch):
    monkeypatch.delenv("VINTLANG_TEST_FLAG", raising=False)
    assert get_env_flag("VINTLANG_TEST_FLAG", default=True) is True


def test_get_env_int(monkeypatch):
    monkeypatch.delenv("VINTLANG_MAX_PROBLEMS", raising=False)
    assert get_env_int("VINTLANG_MAX_PROBLEMS", 1000) == 1000

    monkeypatch.setenv("VINTLANG_MAX_PROBLEMS", " 25 ")
    assert get_env_int("VINTLANG_MAX_PROBLEMS", 1000) == 25

    monkeypatch.setenv("VINTLANG_MAX_PROBLEMS", "many")
    with pytest.raises(click.BadParameter):
        get_env_int("VINTLANG_MAX_PROBLEMS")


def test_format_error():
    assert format_error(ValueError("bad port")) == {"error": "bad port"}

    detailed = format_error(ValueError("bad port"), debug=True)
    assert detailed["type"] == "ValueError"
    assert "traceback" in detailed


def test_configure_logging_levels(monkeypatch, restore_logging):
    monkeypatch.delenv("VINTLANG_DEBUG", raising=False)
    monkeypatch.delenv("VINTLANG_LOG_FILE", raising=False)

    configure_logging(debug=False)
    assert logging.getLogger().level == logging.WARNING
    assert len(logging.getLogger().handlers) == 1

    monkeypatch.setenv("VINTLANG_DEBUG", "1")
    configure_logging(debug=False)
    assert logging.getLogger().level == logging.DEBUG


def test_configure_logging_file(monkeypatch, tmp_path, restore_logging):
    monkeypatch.delenv("VINTLANG_DEBUG", raising=False)
    log_file = tmp_path / "lsp.log"

    configure_logging(debug=True, log_file=str(log_file))
    logging.getLogger("vintlang.test").debug("hello from the server")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "DEBUG:vintlang.test:hello from the server" in log_file.read_text()
