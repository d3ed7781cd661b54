"""Tests for the application and usage loggers."""

import logging
from unittest.mock import MagicMock

import pytest

from src.infrastructure.logging import logger as logger_module


@pytest.fixture
def fresh_singletons(monkeypatch):
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)


def test_builder_writes_dated_file_under_subdir(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20250301"),
    )

    built = (
        logger_module.LoggerBuilder()
        .name("portfolio.test.import")
        .subdir("import")
        .prefix("import_logs")
        .console(False)
        .level(logging.DEBUG)
        .build()
    )

    assert built.level == logging.DEBUG
    assert built.propagate is False
    assert len(built.handlers) == 1
    expected = tmp_path / "logs" / "import" / "20250301_import_logs.log"
    assert built.handlers[0].baseFilename == str(expected)
    assert expected.parent.is_dir()

    again = logger_module.LoggerBuilder().name("portfolio.test.import").build()
    assert again is built
    assert len(again.handlers) == 1
    for handler in list(built.handlers):
        handler.close()
        built.removeHandler(handler)


def test_builder_uses_injected_factories(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    fmt = logging.Formatter("%(message)s")
    file_handler = logging.NullHandler()
    console_handler = logging.NullHandler()
    seen_paths = []

    def _file_factory(path, formatter):
        seen_paths.append(path)
        assert formatter is fmt
        return file_handler

    built = (
        logger_module.LoggerBuilder()
        .name("portfolio.test.factories")
        .formatter(lambda: fmt)
        .file_handler(_file_factory)
        .console_handler(lambda formatter: console_handler)
        .build()
    )

    assert built.handlers == [file_handler, console_handler]
    assert seen_paths[0].parent == tmp_path / "logs" / "app"
    built.handlers.clear()


def test_default_handlers_log_at_info(tmp_path):
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "app.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert console_handler.level == logging.INFO
    file_handler.close()


def test_app_and_usage_loggers_are_separate_singletons(
    monkeypatch,
    fresh_singletons,
):
    built = []

    def _fake_build(self):
        built.append((self._name, self._subdir, self._prefix))
        return MagicMock()

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _fake_build)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert built == [
        ("portfolio.app", "app", "app_logs"),
        ("portfolio.usage", "usage", "usage_logs"),
    ]

    usage_logger.info("page=总览 currency=CNY")
    usage_logger.logger.info.assert_called_once_with("page=总览 currency=CNY")
    app_logger.warning("rate missing")
    app_logger.logger.warning.assert_called_once_with("rate missing")
