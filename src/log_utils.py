"""
Logging utilities for the Azure Bastion RDP connector.
"""

import logging
import sys
from typing import Optional

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Set up logging configuration.

    Console output carries a severity prefix ([INFO], [WARNING], [CRITICAL]...)
    so failures stand out in the interactive session.

    Args:
        verbose: Enable verbose (DEBUG) logging
        log_file: Optional path to an additional log file

    Returns:
        Logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers = [console]

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    return logging.getLogger(__name__)
