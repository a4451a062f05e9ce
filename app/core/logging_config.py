# app/core/logging_config.py

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(name)s:%(levelname)s] %(message)s"


def configure_logging(level_name: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger once and align uvicorn/fastapi loggers to it.
    Returns the main application logger.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    # Set uvicorn loggers to same level
    for name in ("uvicorn.error", "uvicorn.access", "fastapi"):
        logging.getLogger(name).setLevel(level)

    logger = logging.getLogger("reddyfit")
    logger.setLevel(level)
    return logger
