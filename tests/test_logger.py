"""Tests for the logger module."""

import logging
from unittest.mock import patch

import pytest

import mongoquery.logger as logger_module
from mongoquery.logger import ROOT_LOGGER, Logger, qualified_name, setup_global_logging
from mongoquery.querydsl.compilers.mongo import MongoWhereCompiler


@pytest.fixture
def fresh_root():
    """Unconfigure the package logger for the duration of a test."""
    root = logging.getLogger(ROOT_LOGGER)
    handlers, level = root.handlers[:], root.level
    root.handlers = []
    logger_module._configured = False
    yield root
    root.handlers = handlers
    root.setLevel(level)
    logger_module._configured = True


class TestSetupGlobalLogging:
    def test_default_level(self, fresh_root):
        setup_global_logging()
        assert fresh_root.level == logging.INFO
        assert len(fresh_root.handlers) == 1

    def test_debug_level(self, fresh_root):
        setup_global_logging(level="debug")
        assert fresh_root.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, fresh_root):
        setup_global_logging(level="verbose")
        assert fresh_root.level == logging.INFO

    def test_configures_once(self, fresh_root):
        setup_global_logging()
        setup_global_logging(level="DEBUG")
        assert fresh_root.level == logging.INFO
        assert len(fresh_root.handlers) == 1

    def test_leaves_root_logger_alone(self, fresh_root):
        with patch("logging.basicConfig") as mock_basicconfig:
            setup_global_logging()
            mock_basicconfig.assert_not_called()


class TestQualifiedName:
    @pytest.mark.parametrize(
        "name, expected",
        [
            (None, "mongoquery"),
            ("", "mongoquery"),
            ("mongoquery", "mongoquery"),
            ("engine", "mongoquery.engine"),
            ("mongoquery.engine", "mongoquery.engine"),
            ("mongoqueryx", "mongoquery.mongoqueryx"),
        ],
    )
    def test_names_under_package(self, name, expected):
        assert qualified_name(name) == expected


class TestLogger:
    def test_name_is_namespaced(self):
        assert Logger("compiler.field").name == "mongoquery.compiler.field"

    def test_compilers_log_under_compiler_namespace(self):
        assert MongoWhereCompiler().logger.name == "mongoquery.compiler.mongo"

    def test_message_at_info(self):
        logger = Logger("test")
        with patch.object(logger_module.api_settings, "LOG_LEVEL", "INFO"):
            with patch.object(logger._logger, "log") as mock_log:
                logger.message("compiled %s", "query")
                mock_log.assert_called_once_with(logging.INFO, "compiled %s", "query")

    def test_message_at_debug(self):
        logger = Logger("test")
        with patch.object(logger_module.api_settings, "LOG_LEVEL", "DEBUG"):
            with patch.object(logger._logger, "log") as mock_log:
                logger.message("compiled")
                mock_log.assert_called_once_with(logging.DEBUG, "compiled")

    def test_message_at_warning(self):
        logger = Logger("test")
        with patch.object(logger_module.api_settings, "LOG_LEVEL", "WARNING"):
            with patch.object(logger._logger, "log") as mock_log:
                logger.message("compiled")
                mock_log.assert_called_once_with(logging.WARNING, "compiled")

    def test_compiled_records_input_and_output(self, caplog):
        compiler = MongoWhereCompiler(virtual_key="id")
        with caplog.at_level(logging.DEBUG, logger="mongoquery.compiler"):
            compiler.to_where({"id": 1})
        records = [r for r in caplog.records if r.name == "mongoquery.compiler.mongo"]
        assert len(records) == 1
        assert records[0].getMessage() == "where {'id': 1} -> {'_id': {'$eq': 1}}"

    def test_compiled_silent_above_debug(self, caplog):
        compiler = MongoWhereCompiler()
        with caplog.at_level(logging.INFO, logger="mongoquery.compiler"):
            compiler.to_where({"a": 1})
        assert not [r for r in caplog.records if r.name.startswith("mongoquery.compiler")]
