# test_logger.py

import logging

from typemorph import Logger, TypeMorph
from typemorph.display import MemorySurface


class TestLogger:
    """Handler setup of the session logger."""

    def setup_method(self):
        self.name = f"typemorph.tests.{id(self):x}"

    def teardown_method(self):
        Logger(self.name).close()

    def test_enabling_after_disabled_logger_writes(self, tmp_path):
        log_file = tmp_path / "session.log"
        Logger(self.name, False)
        logger = Logger(self.name, True, log_file=str(log_file))
        logger.debug("hello")
        assert "TypeMorph: hello" in log_file.read_text()

    def test_disabling_drops_earlier_handlers(self, tmp_path):
        log_file = tmp_path / "session.log"
        Logger(self.name, True, log_file=str(log_file)).debug("first")
        Logger(self.name, False).debug("second")
        content = log_file.read_text()
        assert "first" in content
        assert "second" not in content
        assert logging.getLogger(self.name).level == logging.NOTSET

    def test_close_stops_writing(self, tmp_path):
        log_file = tmp_path / "session.log"
        logger = Logger(self.name, True, log_file=str(log_file))
        logger.close()
        logger.error("after close")
        assert "after close" not in log_file.read_text()
        assert all(isinstance(h, logging.NullHandler) for h in logging.getLogger(self.name).handlers)


class TestSessionLogging:
    """Each session configures its own logger."""

    def setup_method(self):
        self.surface = MemorySurface()
        self.root = self.surface.create_container()

    def test_sessions_do_not_share_loggers(self, tmp_path):
        log_file = tmp_path / "enabled.log"
        quiet = TypeMorph(self.surface, parent=self.root)
        loud = TypeMorph(self.surface, parent=self.root, logging_enabled=True, log_file=str(log_file))
        assert quiet.logger._logger is not loud.logger._logger

        loud.logger.info("visible")
        assert "visible" in log_file.read_text()
        assert quiet.logger._logger.level == logging.NOTSET
        loud.destroy()
        quiet.destroy()

    def test_destroy_closes_owned_logger(self, tmp_path):
        log_file = tmp_path / "session.log"
        session = TypeMorph(self.surface, parent=self.root, logging_enabled=True, log_file=str(log_file))
        session.destroy()
        session.logger.error("late")
        assert "Session destroyed" in log_file.read_text()
        assert "late" not in log_file.read_text()
