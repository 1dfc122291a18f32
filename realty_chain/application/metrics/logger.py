from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path


def configure_metrics_logger(
    path: str,
    *,
    max_bytes: int = 10 * 1024 * 1024,
    backups: int = 5,
    logger_name: str = "metrics.actions",
) -> logging.Logger:
    """
    Route the network-action metrics logger to a size-rotated JSON lines file.
    Calling it again with the same path is a no-op.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    for handler in logger.handlers[:]:
        if getattr(handler, "baseFilename", None) == os.path.abspath(target):
            return logger
        logger.removeHandler(handler)
        handler.close()

    handler = RotatingFileHandler(target, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
