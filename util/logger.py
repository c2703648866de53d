# util/logger.py
import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from typing import Final
from config.settings import settings

# Fernet tokens are urlsafe base64 starting with version byte 0x80 -> "gAAAAA"
_TOKEN_RE: Final = re.compile(r"gAAAAA[A-Za-z0-9_\-]{16,}={0,2}")
REDACTED: Final[str] = "<bearer:redacted>"

QUIET_LOGGERS: Final = ("fastapi_limiter", "redis", "asyncio", "multipart")


class RedactTokensFilter(logging.Filter):
    """Last line of defense: a bearer token must never be written to a log sink."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        if "gAAAAA" in msg:
            record.msg = _TOKEN_RE.sub(REDACTED, msg)
            record.args = None
        return True


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Colorize a copy; the same record still reaches the plain file handler
        colored = logging.makeLogRecord(record.__dict__)
        lvl = record.levelname
        colored.levelname = f"{self.COLORS.get(lvl, self.RESET)}{lvl}{self.RESET}"
        return super().format(colored)


def _use_color() -> bool:
    if settings.LOG_COLOR is not None:
        return settings.LOG_COLOR
    return sys.stdout.isatty()


def init_logger() -> logging.Logger:
    """
    Idempotent: stdout always, rotating file only when LOG_TO_FILE.
    Every handler carries RedactTokensFilter.
    """
    root = logging.getLogger()
    if getattr(root, "_dropspace_inited", False):
        return logging.getLogger(settings.LOGGER_NAME)

    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    text_fmt = "%(asctime)s %(levelname)s %(name)s - %(message)s"
    date_fmt = "%Y-%m-%dT%H:%M:%S%z"
    redact = RedactTokensFilter()

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(
        ColoredFormatter(text_fmt, datefmt=date_fmt)
        if _use_color()
        else logging.Formatter(text_fmt, datefmt=date_fmt)
    )
    ch.addFilter(redact)
    root.addHandler(ch)

    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        fh = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(text_fmt, datefmt=date_fmt))
        fh.addFilter(redact)
        root.addHandler(fh)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root._dropspace_inited = True  # type: ignore[attr-defined]
    logger = logging.getLogger(settings.LOGGER_NAME)
    logger.debug(
        "logger.init level=%s file=%s data_dir=%s",
        logging.getLevelName(level),
        settings.LOG_TO_FILE,
        settings.DATA_DIR,
    )
    return logger
