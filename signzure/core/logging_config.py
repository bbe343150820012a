"""
Logging setup for signzure.

Token builders log one DEBUG record per token with structured context
(operation, resource, expiry). Keys and signatures never reach a handler:
every handler carries a SensitiveDataFilter that scrubs the message, its
arguments and the attached context.
"""

import json
import logging
import logging.handlers
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from signzure.core.config_manager import LogFormat, LoggingConfig, LogLevel

REDACTED = "***REDACTED***"

_SECRET_PATTERNS = [
    # SAS query string: sr=...&sig=<signature>&se=...
    re.compile(r'(sig=)[^;&\s]+', re.IGNORECASE),
    # Cosmos token: type%3dmaster%26ver%3d1.0%26sig%3d<signature>
    re.compile(r'(sig%3d)[^;&\s%]+(?:%[0-9a-f]{2}[^;&\s%]*)*', re.IGNORECASE),
    # Connection strings
    re.compile(r'(SharedAccessKey=)[^;]+', re.IGNORECASE),
    re.compile(r'(AccountKey=)[^;]+', re.IGNORECASE),
    re.compile(r'(Authorization:\s+)(?:Bearer\s+)?\S+', re.IGNORECASE),
    re.compile(r'((?:secret|key)["\']?\s*[:=]\s*["\']?)[^\s"\',;]+', re.IGNORECASE),
]


def redact(text: str) -> str:
    """Replace signatures and key material in text with a placeholder."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(r'\1' + REDACTED, text)
    return text


def _redact_value(value: Any) -> Any:
    return redact(value) if isinstance(value, str) else value


class SensitiveDataFilter(logging.Filter):
    """Scrub signing material from the message, its args and its context."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)

        if isinstance(record.args, dict):
            record.args = {k: _redact_value(v) for k, v in record.args.items()}
        elif record.args:
            record.args = tuple(_redact_value(arg) for arg in record.args)

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            record.context = {k: _redact_value(v) for k, v in context.items()}
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record; context keys are nested under "context"."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines, with context appended as key=value pairs."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


def setup_logging(
    level: str = "INFO",
    format_type: str = "text",
    log_file: Optional[str] = None,
    rotation_size: str = "10MB",
    rotation_count: int = 5,
    module_levels: Optional[Dict[str, str]] = None
) -> None:
    """
    Configure the root logger.

    Records go to stderr, so CLI output on stdout can be piped safely.

    Args:
        level: Default log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "json" or "text"
        log_file: Optional path of a rotating log file
        rotation_size: Size limit per log file, e.g. "10MB"
        rotation_count: Number of rotated files to keep
        module_levels: Per-logger levels, e.g. {"signzure.tokens": "DEBUG"}
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    formatter = JSONFormatter() if format_type == "json" else TextFormatter()
    handlers = [logging.StreamHandler(sys.stderr)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=_parse_size(rotation_size),
            backupCount=rotation_count,
            encoding="utf-8",
        ))

    for handler in handlers:
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)
        handler.addFilter(SensitiveDataFilter())
        root_logger.addHandler(handler)

    for module_name, module_level in (module_levels or {}).items():
        logging.getLogger(module_name).setLevel(getattr(logging, module_level.upper()))

    log_with_context(
        root_logger,
        logging.DEBUG,
        "Logging configured",
        level=level,
        format=format_type,
        file=log_file,
    )


def configure_logging(config: LoggingConfig) -> None:
    """Apply the logging section of a loaded SignzureConfig."""
    setup_logging(
        level=LogLevel(config.level).value,
        format_type=LogFormat(config.format).value,
        log_file=config.file,
        rotation_size=config.rotation_size,
        rotation_count=config.rotation_count,
        module_levels=config.module_levels,
    )


def _parse_size(size_str: str) -> int:
    """Parse "10MB", "512KB", "1.5GB" or a plain byte count."""
    size_str = size_str.upper().strip()
    # Longest suffix first so 'MB' is not read as 'B'
    for suffix, multiplier in (("GB", 1024 ** 3), ("MB", 1024 ** 2), ("KB", 1024), ("B", 1)):
        if size_str.endswith(suffix):
            return int(float(size_str[:-len(suffix)].strip()) * multiplier)
    return int(size_str)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module."""
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """
    Log a message with structured context.

    Context entries whose value is None are dropped.
    """
    context = {k: v for k, v in context.items() if v is not None}
    extra = {"context": context} if context else {}
    logger.log(level, message, extra=extra)
