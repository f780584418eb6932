"""Tests for the logging helpers.

Author: Michael Economou
Date: 2026-10-12
"""

import io
import logging

import pytest

from mediarename.utils.logging.logger_factory import LoggerFactory, get_cached_logger
from mediarename.utils.logging.logger_file_helper import NameFilter, add_file_handler
from mediarename.utils.logging.logger_helper import DevOnlyFilter, safe_log, safe_text
from mediarename.utils.logging.logger_setup import create_console_handler, get_user_config_dir


def _record(name="mediarename.test", **extra):
    record = logging.LogRecord(name, logging.DEBUG, __file__, 1, "message", (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLoggerFactory:
    @pytest.fixture(autouse=True)
    def _fresh_cache(self):
        LoggerFactory.clear_cache()
        yield
        LoggerFactory.clear_cache()

    def test_same_name_is_cached(self):
        first = get_cached_logger("mediarename.tests.cached")

        assert get_cached_logger("mediarename.tests.cached") is first
        assert "mediarename.tests.cached" in LoggerFactory.get_cached_names()

    def test_name_defaults_to_caller_module(self):
        assert LoggerFactory.get_logger().name == __name__

    def test_global_level(self):
        logger = get_cached_logger("mediarename.tests.level")

        LoggerFactory.set_global_level(logging.WARNING)

        assert logger.level == logging.WARNING
        assert get_cached_logger("mediarename.tests.level_new").level == logging.WARNING


class TestHelpers:
    def test_safe_text(self):
        assert safe_text("a → b … ü") == "a -> b ... \\xfc"

    def test_safe_log_falls_back_to_ascii(self):
        seen = []

        def picky(message, *args):
            text = message % args
            text.encode("ascii")
            seen.append(text)

        safe_log(picky, "renamed %s", "café.jpg")

        assert seen == ["renamed caf\\xe9.jpg"]

    def test_safe_log_keeps_numeric_arguments(self):
        seen = []

        def picky(message, *args):
            text = message % args
            text.encode("ascii")
            seen.append(text)

        safe_log(picky, "%s: %d files in %.2fs", "café", 3, 1.5)

        assert seen == ["caf\\xe9: 3 files in 1.50s"]

    def test_dev_only_filter_can_be_enabled(self):
        assert DevOnlyFilter(show_dev_only=True).filter(_record(dev_only=True))

    @pytest.mark.parametrize(("level", "shown"), [(logging.DEBUG, True), (logging.INFO, False)])
    def test_console_shows_dev_only_at_debug(self, level, shown):
        stream = io.StringIO()
        handler = create_console_handler(level, stream)
        record = logging.LogRecord(
            "mediarename.core", logging.INFO, __file__, 1, "claimed %s", ("a.jpg",), None
        )
        record.dev_only = True

        handler.handle(record)

        assert ("[INFO] claimed a.jpg" in stream.getvalue()) is shown

    def test_dev_only_filter(self):
        dev_filter = DevOnlyFilter()

        assert dev_filter.filter(_record())
        assert not dev_filter.filter(_record(dev_only=True))

    def test_name_filter(self):
        name_filter = NameFilter("mediarename.cli")

        assert name_filter.filter(_record("mediarename.cli"))
        assert not name_filter.filter(_record("mediarename.core"))

    def test_user_config_dir(self, monkeypatch, tmp_path):
        monkeypatch.setattr("os.name", "posix")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_user_config_dir("mediarename") == str(tmp_path / "mediarename")


class TestFileHandler:
    def test_writes_formatted_records(self, tmp_path):
        logger = logging.getLogger("mediarename.tests.file")
        logger.setLevel(logging.DEBUG)
        log_path = tmp_path / "logs" / "run.log"

        handler = add_file_handler(logger, str(log_path), level=logging.INFO)
        try:
            logger.debug("hidden")
            logger.info("renamed %s", "a.jpg")
            handler.flush()
        finally:
            logger.removeHandler(handler)
            handler.close()

        content = log_path.read_text(encoding="utf-8")
        assert "renamed a.jpg" in content
        assert "hidden" not in content
        assert "INFO" in content
