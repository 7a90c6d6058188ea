"""
Logging setup.

One call configures the root logger: stdout always, plus a rotating file
when LOG_FILE is set. Modules log through `logging.getLogger(__name__)`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 10_000_000,
    backup_count: int = 5,
) -> logging.Logger:
    global _configured
    logger = logging.getLogger()
    logger.setLevel(level.upper())
    if _configured:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if log_file:
        Path(log_file).parent.mkdir(exist_ok=True, parents=True)
        handler = RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _configured = True
    return logger
