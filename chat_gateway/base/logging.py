"""Base structured logging utilities for the gateway.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid sprinkling ad-hoc logger setup across adapters.

All adapter loggers are children of the shared ``chat_gateway`` logger, which
owns the only console handler. The level honours ``CHAT_GATEWAY_LOG_LEVEL``.
Credentials must never be passed to :func:`log_event`.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from .log_support import JsonFormatter, LogContext

ROOT_LOGGER_NAME = "chat_gateway"
LOG_LEVEL_ENV = "CHAT_GATEWAY_LOG_LEVEL"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_BASE_LOGGER_ATTR = "_gateway_logger_initialized"
_FILE_HANDLER_ATTR = "_gateway_file_handler"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level string into an integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL) case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``chat_gateway`` logger."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        return logger
    desired_level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_make_formatter(json_mode))
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a gateway logger; non-root names become propagating children."""
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == ROOT_LOGGER_NAME:
        return base_logger
    if not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared gateway logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level (numeric or name). ``None`` keeps the current one.
    file_path: Optional[str]
        When provided, a rotating file handler writing to ``file_path`` is
        attached (replacing any previously managed one). When ``None``, any
        managed file handler is removed.
    json_mode: bool
        Whether the file handler uses the JSON formatter.

    Returns
    -------
    logging.Logger
        The configured root gateway logger. User-attached handlers are kept.
    """
    logger = get_logger(ROOT_LOGGER_NAME, json_mode=json_mode)

    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)
        for h in logger.handlers:
            h.setLevel(logger.level)

    for h in [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]:
        logger.removeHandler(h)
        with contextlib.suppress(OSError):
            h.close()
    if file_path is None:
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    # 10MB x 5 backups
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setLevel(logger.level)
    fh.setFormatter(_make_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON line.

    Keys whose values are ``None`` are dropped to keep logs concise.

    Parameters
    ----------
    logger: logging.Logger
        Logger instance (should be obtained from ``get_logger``).
    event: str
        Event name (e.g. ``stream.start``).
    ctx: LogContext | None
        Provider/model context; merged shallowly.
    level: int
        Logging level for the record.
    **fields: Any
        Arbitrary serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "LogContext",
    "ROOT_LOGGER_NAME",
    "get_logger",
    "configure_logger",
    "log_event",
]
