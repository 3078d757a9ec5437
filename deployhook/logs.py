"""Append-only webhook log sink built on stdlib logging."""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "deployhook"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(log_file: Path | None, level: str = "INFO") -> logging.Logger:
    """Return the service logger writing timestamped, level-tagged lines to ``log_file``.

    FileHandler opens the file in append mode and serializes emits under its own
    lock, so the returned logger is safe to share between request threads.
    Handlers from a previous call are closed and replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level_no = getattr(logging, (level or "").strip().upper(), None)
    logger.setLevel(level_no if isinstance(level_no, int) else logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler: logging.Handler
    if log_file is None:
        handler = logging.StreamHandler(sys.stderr)
    else:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            print(f"deployhook: cannot open log file {log_file}: {e}; logging to stderr", file=sys.stderr)
            handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
