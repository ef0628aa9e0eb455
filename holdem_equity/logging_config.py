"""
logging_config.py

Package logger configuration. Library modules only call get_logger();
handlers are installed by configure_logging() from the CLI and scripts.
"""
import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("holdem_equity")


def get_logger(name: str) -> logging.Logger:
    if name == "holdem_equity" or name.startswith("holdem_equity."):
        return logging.getLogger(name)
    return logger.getChild(name)


def configure_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT)
    for h in list(logger.handlers):
        logger.removeHandler(h)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    logger.setLevel(level)
    logger.propagate = False
    return logger
