"""Tests for listing_refresh/common/log_config.py"""

import logging
import sys

from listing_refresh.common.log_config import LOGGER_NAME, SCRIPT_LOGGER_NAME, setup_logging


class TestSetupLogging:
    def teardown_method(self):
        """Reset loggers between tests."""
        for name in (LOGGER_NAME, SCRIPT_LOGGER_NAME):
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            logger.setLevel(logging.NOTSET)

    def test_default_level_is_info(self):
        setup_logging()
        assert logging.getLogger(LOGGER_NAME).level == logging.INFO

    def test_verbose_sets_debug(self):
        setup_logging(verbose=True)
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

    def test_quiet_sets_warning(self):
        setup_logging(quiet=True)
        assert logging.getLogger(LOGGER_NAME).level == logging.WARNING

    def test_handler_outputs_to_stderr(self):
        setup_logging()
        logger = logging.getLogger(LOGGER_NAME)
        assert len(logger.handlers) == 1
        assert logger.handlers[0].stream is sys.stderr

    def test_script_logger_configured(self):
        setup_logging(quiet=True)
        logger = logging.getLogger(SCRIPT_LOGGER_NAME)
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging()
        setup_logging(verbose=True)
        assert len(logging.getLogger(LOGGER_NAME).handlers) == 1

    def test_log_file(self, tmp_path):
        log_path = tmp_path / "run.log"
        setup_logging(log_file=log_path)

        logging.getLogger(LOGGER_NAME + ".etsy").info("exported %d listings", 3)
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()

        assert "exported 3 listings" in log_path.read_text(encoding="utf-8")
        assert len(logging.getLogger(LOGGER_NAME).handlers) == 2

    def test_urllib3_quiet_unless_verbose(self):
        setup_logging()
        assert logging.getLogger("urllib3").level == logging.WARNING
        setup_logging(verbose=True)
        assert logging.getLogger("urllib3").level == logging.DEBUG
