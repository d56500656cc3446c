"""
Runtime checks performed before anything else runs.
"""

import logging
import platform
import sys
from typing import Tuple

logger = logging.getLogger(__name__)


def check_environment(min_python: Tuple[int, int] = (3, 10)) -> bool:
    """
    Confirm the interpreter and console can host the interactive session.

    Args:
        min_python: Minimum (major, minor) Python version

    Returns:
        True if the session may continue, False otherwise
    """
    if sys.version_info[:2] < tuple(min_python):
        logger.critical(
            f"Python {min_python[0]}.{min_python[1]} or later is required "
            f"(running {platform.python_version()})."
        )
        return False

    if not sys.stdin or not sys.stdin.isatty():
        logger.critical(
            "An interactive terminal is required to select and connect to a VM."
        )
        return False

    return True
