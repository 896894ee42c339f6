"""Logging setup for the command line entry point."""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Configure the root logger.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR. DEBUG traces every MegaCli
            command and by-path probe.
        log_file: Optional path to a log file; console output is kept either way.
    """
    level = getattr(logging, log_level.upper())
    handlers = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
