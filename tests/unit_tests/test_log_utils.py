"""
Unit tests for logging utilities.
"""

import logging
import os
import tempfile
import unittest
from log_utils import setup_logging


class TestLogUtils(unittest.TestCase):
    """Test logging utilities."""

    def tearDown(self):
        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.WARNING)

    def test_setup_logging_default(self):
        """Test default logging setup."""
        logger = setup_logging()
        self.assertIsInstance(logger, logging.Logger)
        self.assertEqual(logging.getLogger().level, logging.INFO)

    def test_setup_logging_verbose(self):
        """Test verbose logging setup."""
        setup_logging(verbose=True)
        self.assertEqual(logging.getLogger().level, logging.DEBUG)

    def test_console_has_severity_prefix(self):
        """Test console records are prefixed with their level."""
        setup_logging()
        handler = logging.getLogger().handlers[0]
        record = logging.LogRecord("t", logging.WARNING, "", 0, "careful", None, None)
        self.assertEqual(handler.format(record), "[WARNING] careful")

    def test_setup_logging_with_file(self):
        """Test an optional log file handler is added."""
        with tempfile.TemporaryDirectory() as tmp:
            log_file = os.path.join(tmp, "connect.log")
            setup_logging(log_file=log_file)
            logging.getLogger("test").info("hello")
            handlers = logging.getLogger().handlers
            self.assertEqual(len(handlers), 2)
            for handler in handlers:
                handler.flush()
            with open(log_file) as fh:
                self.assertIn("INFO - hello", fh.read())
            self.tearDown()


if __name__ == "__main__":
    unittest.main()
