from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from shopfloor.config import LOG_FILE, LOG_LEVEL

LOG_FORMAT = "%(asctime)s - [%(name)s] - %(levelname)s - %(message)s"


def get_logger(name: str, log_file: Optional[str] = LOG_FILE, level: str = LOG_LEVEL) -> logging.Logger:
    """Return a named logger with a stream handler and, when configured, a file handler.

    Handlers are attached once per logger, so repeated Streamlit reruns do not
    duplicate output.
    """
    logger = logging.getLogger(name)
    try:
        logger.setLevel(level)
    except ValueError:
        logger.setLevel(logging.INFO)
    logger.propagate = False
    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
    return logger
