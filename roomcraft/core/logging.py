"""
Logging configuration for the API.

Standard library loggers are the entry point everywhere; structlog renders
the records. Use `get_logger` from the logging middleware where the request
id should appear in the message text.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

import structlog

from roomcraft.core.config import settings

FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

NOISY_LOGGERS = (
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "openai",
    "aiohttp",
    "sqlalchemy.engine",
)


def add_request_id(logger, method_name, event_dict):
    """structlog processor attaching the id of the request being served"""
    # Imported here so configuring logging does not pull in the web stack
    from roomcraft.middleware.logging_middleware import get_request_id

    request_id = get_request_id()
    if request_id:
        event_dict.setdefault("request_id", request_id)
    return event_dict


def _renderer():
    if settings.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty(), exception_formatter=structlog.dev.plain_traceback)


def _file_handlers(log_dir: Path) -> List[logging.Handler]:
    log_dir.mkdir(exist_ok=True)
    handlers = []
    for file_name, level in (("roomcraft.log", logging.DEBUG), ("roomcraft_errors.log", logging.ERROR)):
        handler = RotatingFileHandler(log_dir / file_name, maxBytes=10 * 1024 * 1024, backupCount=5)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(handler)
    return handlers


def setup_logging():
    """Configure logging for the application."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_request_id,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter("%(message)s" if settings.log_format == "json" else "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [console_handler]

    if settings.environment == "production":
        for handler in _file_handlers(Path("logs")):
            root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: level={settings.log_level}, format={settings.log_format}, env={settings.environment}"
    )
