"""Logging setup for the command-line front-end."""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path


def setup_logging() -> None:
    """Configure stderr logging and, when requested, a log file."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    level_name = os.getenv("DESIGNKB_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    log_file = os.getenv("DESIGNKB_LOG_FILE")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(level)
