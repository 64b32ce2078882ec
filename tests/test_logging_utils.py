"""Tests for the logging helpers."""

import logging
import time

from common.logging_utils import Timer, add_file_handler, configure_logging, extra_context, is_debug_enabled


class TestLoggingUtils:
    """configure_logging and friends."""

    def test_configure_is_idempotent(self):
        root = logging.getLogger()
        configure_logging("WARNING")
        handlers = list(root.handlers)
        configure_logging("DEBUG")
        assert root.handlers == handlers
        assert root.level == logging.DEBUG

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("WEBJARS_LOG_LEVEL", "error")
        configure_logging()
        assert logging.getLogger().level == logging.ERROR

    def test_unknown_level_falls_back_to_info(self):
        configure_logging("chatty")
        assert logging.getLogger().level == logging.INFO

    def test_extra_context_drops_none(self):
        assert extra_context(event="x", outcome=None, count=0) == {"event": "x", "count": 0}

    def test_is_debug_enabled(self):
        logger = logging.getLogger("tests.debug_probe")
        logger.setLevel(logging.DEBUG)
        assert is_debug_enabled(logger)
        logger.setLevel(logging.INFO)
        assert not is_debug_enabled(logger)

    def test_file_handler(self, tmp_path):
        path = tmp_path / "run.log"
        handler = add_file_handler(str(path))
        logger = logging.getLogger("tests.file")
        logger.setLevel(logging.INFO)
        try:
            logger.warning("written %s", "here")
            handler.flush()
        finally:
            logging.getLogger().removeHandler(handler)
            handler.close()
        assert "written here" in path.read_text(encoding="utf-8")

    def test_timer(self):
        with Timer() as timer:
            time.sleep(0.01)
        assert timer.duration_ms() >= 5
        assert Timer().duration_ms() == 0.0
