"""
Unit tests for the environment guard.
"""

import unittest
from unittest.mock import MagicMock, patch
from environment import check_environment


class TestCheckEnvironment(unittest.TestCase):
    """Test interpreter and console checks."""

    def tty(self, interactive=True):
        stdin = MagicMock()
        stdin.isatty.return_value = interactive
        return stdin

    def test_interactive_supported_python_passes(self):
        with patch("environment.sys.stdin", self.tty()):
            self.assertTrue(check_environment((3, 0)))

    def test_old_python_rejected(self):
        with patch("environment.sys.stdin", self.tty()):
            with self.assertLogs("environment", level="CRITICAL"):
                self.assertFalse(check_environment((99, 0)))

    def test_non_interactive_console_rejected(self):
        with patch("environment.sys.stdin", self.tty(interactive=False)):
            with self.assertLogs("environment", level="CRITICAL"):
                self.assertFalse(check_environment((3, 0)))

    def test_missing_stdin_rejected(self):
        with patch("environment.sys.stdin", None):
            with self.assertLogs("environment", level="CRITICAL"):
                self.assertFalse(check_environment((3, 0)))


if __name__ == "__main__":
    unittest.main()
