"""
Structured logging for provisioning runs.

Every module logs key/value events through structlog. The events are rendered
by stdlib handlers, so a run leaves a JSON trail next to the console output
that the image build agent shows.
"""
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional

import structlog

from buildprov.internal import paths
from buildprov.internal.constants import APP_NAME, ENV_LOG_LEVEL

LOG_FILE_NAME = f"{APP_NAME}.log.json"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Third-party loggers that are only interesting when something breaks
QUIET_LOGGERS = ("urllib3", "requests")

_LOGGING_CONFIGURED = False


def _resolve_level(default: str) -> int:
    name = os.environ.get(ENV_LOG_LEVEL, default).upper()
    return getattr(logging, name, logging.INFO)


def _formatter(renderer) -> structlog.stdlib.ProcessorFormatter:
    # Records from plain stdlib loggers (urllib3, ...) get the same fields as ours
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )


def _file_handler(log_file_path: Path) -> logging.Handler:
    log_file_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
    )
    if log_file_path.name.endswith(".json"):
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    handler.setFormatter(_formatter(renderer))
    return handler


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_formatter(structlog.dev.ConsoleRenderer()))
    return handler


def setup_logging(log_level_name: str = "INFO", log_file_path: Optional[Path] = None, console_output: bool = False):
    """
    Route structlog events to a rotating file and/or stdout.

    A file named `*.json` receives one JSON object per line; any other name gets
    plain text. BUILDPROV_LOG_LEVEL overrides `log_level_name`. Only the first
    call has an effect.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    handlers = []
    if log_file_path:
        handlers.append(_file_handler(log_file_path))
    if console_output:
        handlers.append(_console_handler())
    if not handlers:
        handlers.append(logging.NullHandler())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=_resolve_level(log_level_name), handlers=handlers, force=True)
    _LOGGING_CONFIGURED = True


def configure_logging(name: Optional[str] = None):
    """CLI entry point: JSON file under the app data dir plus console."""
    if not _LOGGING_CONFIGURED:
        setup_logging(log_file_path=paths.get_log_dir() / LOG_FILE_NAME, console_output=True)
    return get_logger(name)


def get_logger(name: Optional[str] = None):
    return structlog.get_logger(name)
