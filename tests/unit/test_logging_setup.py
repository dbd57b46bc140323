"""Logging setup: root level and library logger levels."""

import logging

from xptrack.config import Settings
from xptrack.middleware.logging import setup_logging


class TestSetupLogging:

    def test_library_loggers_quiet_by_default(self):
        setup_logging(Settings(log_level="DEBUG", log_format="console", debug=False))
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("aiosqlite").level == logging.WARNING

    def test_library_loggers_follow_level_in_debug(self):
        setup_logging(Settings(log_level="INFO", log_format="console", debug=True))
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(Settings(log_level="chatty", log_format="console"))
        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
