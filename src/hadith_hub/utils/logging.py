"""Colored console logging for the catalogue tools.

Reports are often redirected to a file for review, so colors can be turned
off (``LOG_COLOR=false``); the ANSI codes embedded in messages are stripped too.
"""

import logging
import re
import sys
from datetime import datetime

GREEN = "\x1b[32m"
RED = "\x1b[31m"
YELLOW = "\x1b[33m"
DIM = "\x1b[2m"
BOLD = "\x1b[1m"
RESET = "\x1b[0m"

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


class CatalogueFormatter(logging.Formatter):
    LEVEL_COLORS = {
        logging.DEBUG: DIM,
        logging.INFO: "",
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: RED + BOLD,
    }

    def __init__(self, color: bool = True):
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now().strftime("%H:%M:%S")
        color = self.LEVEL_COLORS.get(record.levelno, "")
        message = record.getMessage()
        # Warnings and errors get a tag so they survive grep on a plain-text report
        if record.levelno >= logging.WARNING:
            message = f"{record.levelname}: {message}"
        line = f"{DIM}[{ts}]{RESET} {color}{message}{RESET}"
        return line if self.color else _ANSI.sub("", line)


def get_logger(name: str = "hadith_hub", level: str | None = None) -> logging.Logger:
    from hadith_hub.config import settings

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(CatalogueFormatter(color=settings.log_color))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, (level or settings.log_level).upper(), logging.INFO))
    return logger
