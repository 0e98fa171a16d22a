# util/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from config.settings import settings

logging.captureWarnings(True)

_INIT_FLAG = "_syllabus_logging_inited"
_TEXT_FMT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
_DATE_FMT = "%Y-%m-%dT%H:%M:%S%z"

# Client libraries that log every request at INFO; provider calls are
# already covered by our own "ai.*" and "http.*" lines.
QUIET_LOGGERS = ("httpx", "httpcore", "redis", "asyncio")


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
        # Work on a copy so handlers sharing the record still see the plain level.
        colored = logging.makeLogRecord(record.__dict__)
        lvl = record.levelname
        colored.levelname = f"{self.COLORS.get(lvl, self.RESET)}{lvl}{self.RESET}"
        return super().format(colored)


def _console_handler(level: int) -> logging.Handler:
    h = logging.StreamHandler(sys.stdout)
    h.setLevel(level)
    fmt_cls = ColoredFormatter if sys.stdout.isatty() else logging.Formatter
    h.setFormatter(fmt_cls(_TEXT_FMT, datefmt=_DATE_FMT))
    return h


def _file_handler(level: int) -> logging.Handler:
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    h = RotatingFileHandler(
        os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    h.setLevel(level)
    h.setFormatter(logging.Formatter(_TEXT_FMT, datefmt=_DATE_FMT))
    return h


def init_logger() -> logging.Logger:
    """
    Configure the root logger once per process and return the app logger.

    Console output always; a size-rotated file under LOG_DIR when LOG_TO_FILE
    is set. Calling it again (uvicorn reload, tests) is a no-op.
    """
    root = logging.getLogger()
    app_logger = logging.getLogger(settings.LOGGER_NAME)
    if getattr(root, _INIT_FLAG, False):
        return app_logger

    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(_console_handler(level))
    if settings.LOG_TO_FILE:
        root.addHandler(_file_handler(level))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    setattr(root, _INIT_FLAG, True)
    app_logger.debug(
        "logger.init level=%s file=%s", logging.getLevelName(level), settings.LOG_TO_FILE
    )
    return app_logger
