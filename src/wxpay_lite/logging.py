"""Logging configuration for wxpay-lite.

Structured logging via structlog on top of stdlib logging:
- JSON format for production, console format for development
- Masking of keys, signatures and Authorization headers
- Truncation of wire bodies
- Daily log rotation
"""

from __future__ import annotations

import logging
import re
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, MutableMapping

import structlog

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"  # "json" or "console"
DEFAULT_LOG_RETENTION_DAYS = 30

# Wire bodies longer than this are cut in log output
MAX_BODY_LENGTH = 500

SENSITIVE_PATTERNS = [
    re.compile(r".*key.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*private.*", re.IGNORECASE),
    re.compile(r"(pay_?)?sign", re.IGNORECASE),
    re.compile(r"authorization", re.IGNORECASE),
]

# Signature-bearing elements inside logged XML bodies
_XML_SIGN_ELEMENT = re.compile(r"(<(sign|paySign)>)(.*?)(</\2>)", re.DOTALL)

MASK = "***REDACTED***"


def _is_sensitive_key(key: str) -> bool:
    return any(pattern.fullmatch(key) for pattern in SENSITIVE_PATTERNS)


def _mask(value: Any) -> Any:
    if isinstance(value, str) and value:
        return MASK
    return value


def _scrub(data: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    result: dict[str, Any] = {}
    for key, value in data.items():
        if _is_sensitive_key(key):
            result[key] = _mask(value)
        elif isinstance(value, dict):
            result[key] = _scrub(value)
        else:
            result[key] = value
    return result


class SensitiveDataFilter:
    """structlog processor masking credential material in event dicts."""

    def __call__(
        self,
        logger: logging.Logger,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        return _scrub(event_dict)


class BodyTruncator:
    """structlog processor that shortens and scrubs ``body`` values."""

    def __init__(self, max_length: int = MAX_BODY_LENGTH) -> None:
        self.max_length = max_length

    def __call__(
        self,
        logger: logging.Logger,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        body = event_dict.get("body")
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        if isinstance(body, str):
            body = _XML_SIGN_ELEMENT.sub(rf"\g<1>{MASK}\g<4>", body)
            if len(body) > self.max_length:
                body = body[: self.max_length] + "..."
            event_dict["body"] = body
        return event_dict


def _get_log_level(level_name: str) -> int:
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO


def _create_file_handler(log_file: str | Path, retention_days: int) -> TimedRotatingFileHandler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return TimedRotatingFileHandler(
        filename=str(log_path),
        when="midnight",
        interval=1,
        backupCount=retention_days,
        encoding="utf-8",
    )


def _build_handlers(
    log_level: int,
    log_file: str | None,
    retention_days: int,
    enable_console: bool,
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if enable_console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        handlers.append(_create_file_handler(log_file, retention_days))
    for handler in handlers:
        handler.setLevel(log_level)
    return handlers


def _shared_processors() -> list[structlog.types.Processor]:
    """Processors run for structlog events and foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        SensitiveDataFilter(),
        BodyTruncator(),
    ]


def configure_logging(
    level: str = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: str | None = None,
    retention_days: int = DEFAULT_LOG_RETENTION_DAYS,
    enable_console: bool = True,
) -> None:
    """Configure structured logging for applications using the client.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            DEBUG includes every gateway request and response.
        log_format: Output format ("json" or "console").
        log_file: Path to log file (None for console only).
        retention_days: Days to retain rotated log files.
        enable_console: Whether to output to stderr.

    Example:
        >>> configure_logging(level="DEBUG", log_format="console")
    """
    log_level = _get_log_level(level)
    handlers = _build_handlers(log_level, log_file, retention_days, enable_console)
    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    processors = _shared_processors()
    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=processors,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.get_logger(__name__).debug(
        "logging_configured", level=level, format=log_format, log_file=log_file
    )


__all__ = [
    "BodyTruncator",
    "DEFAULT_LOG_FORMAT",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_LOG_RETENTION_DAYS",
    "MASK",
    "SENSITIVE_PATTERNS",
    "SensitiveDataFilter",
    "configure_logging",
]
