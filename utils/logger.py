"""
Logging setup for the Job Sequencer.

Library modules only ask for a module logger; the CLI and the dashboard call
setup_logging() once with the level from the loaded policy.
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", fmt: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger, reusing existing handlers if any.

    Args:
        level: Log level name (e.g., "DEBUG")
        fmt: Log record format

    Returns:
        The root logger
    """
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format=fmt or DEFAULT_FORMAT,
            handlers=[logging.StreamHandler(sys.stderr)]
        )
    else:
        root_logger.setLevel(level)
    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
