"""Loguru setup for the coin catalog: console, optional file, Slack on errors."""

import logging
import sys
from typing import Any, Callable

import httpx
from loguru import logger

from app.core.config import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[name]}:{function}:{line} | {message}"

_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}
_VALID_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}

# Stdlib loggers routed into loguru; httpx logs every upstream request at INFO
_INTERCEPTED = {
    "uvicorn": None,
    "uvicorn.error": None,
    "uvicorn.access": None,
    "httpx": logging.WARNING,
}

_logging_configured = False


class InterceptHandler(logging.Handler):
    """Redirect stdlib logs to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_name == "emit":
            frame = frame.f_back
            depth += 1

        logger.bind(name=record.name).opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def slack_sink(webhook_url: str) -> Callable[[Any], None]:
    """Build a sink posting each record to a Slack incoming webhook."""

    def sink(message: Any) -> None:
        record = message.record
        text = f"[{record['level'].name}] {record['extra']['name']}:{record['function']}:{record['line']}\n{record['message']}"
        try:
            httpx.post(webhook_url, json={"text": text}, timeout=5.0)
        except httpx.HTTPError:
            # Logging the failure here would loop back into this sink
            pass

    return sink


def resolve_level(raw: str | None) -> str:
    level = (raw or "INFO").strip().upper()
    level = _LEVEL_ALIASES.get(level, level)
    return level if level in _VALID_LEVELS else "INFO"


def configure_logging() -> None:
    global _logging_configured

    if _logging_configured:
        return
    _logging_configured = True

    level = resolve_level(settings.effective_log_level)

    logger.remove()
    logger.configure(extra={"name": "coin-id-finder"})
    logger.add(sys.stdout, level=level, format=LOG_FORMAT, backtrace=False, diagnose=False)

    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            level=level,
            format=LOG_FORMAT,
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )

    if settings.SLACK_WEBHOOK_URL:
        logger.add(slack_sink(settings.SLACK_WEBHOOK_URL), level="ERROR", enqueue=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for logger_name, floor in _INTERCEPTED.items():
        std_logger = logging.getLogger(logger_name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
        if floor is not None:
            std_logger.setLevel(floor)


def get_logger(name: str) -> logger.__class__:
    return logger.bind(name=name)


configure_logging()
