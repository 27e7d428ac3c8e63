"""Secure logging utilities.

Provides log sanitisation so session tokens and API keys never reach log
output, plus the logging setup used by the client. Two extra levels are
registered next to the stdlib ones: ``TRACE`` below ``DEBUG`` for
per-request wire detail, and ``FATAL`` as an alias of ``CRITICAL``.
"""

import copy
import logging
import re
import sys
from typing import Any, Dict

TRACE = 5
FATAL = logging.CRITICAL
NONE = logging.CRITICAL + 10

logging.addLevelName(TRACE, "TRACE")

LEVELS: Dict[str, int] = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": FATAL,
    "CRITICAL": logging.CRITICAL,
    "NONE": NONE,
}

# Patterns for sensitive data detection
SENSITIVE_PATTERNS = {
    "jwt_token": re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"),
    "bearer_token": re.compile(r"Bearer\s+[A-Za-z0-9._~+/=-]+", re.IGNORECASE),
    "basic_auth": re.compile(r"Basic\s+[A-Za-z0-9+/=]+", re.IGNORECASE),
}

# Headers that should never be logged
SENSITIVE_HEADERS = {
    "authorization",
    "x-auth-token",
    "cookie",
    "set-cookie",
}


def string_to_log_level(level: str) -> int:
    """Map a level name to a logging level number.

    Unknown names map to ``NONE`` (logging off).

    :param level: Level name such as ``"TRACE"`` or ``"warn"``
    :type level: str
    :return: Numeric logging level
    :rtype: int
    """
    return LEVELS.get((level or "").strip().upper(), NONE)


def sanitize_string(value: str) -> str:
    """Redact tokens and credentials embedded in a string.

    :param value: String to sanitize
    :type value: str
    :return: The string with every sensitive match replaced
    :rtype: str
    """
    if not value:
        return value
    for pattern_name, pattern in SENSITIVE_PATTERNS.items():
        value = pattern.sub(f"<{pattern_name}:REDACTED>", value)
    return value


def sanitize_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitize HTTP headers for logging.

    :param headers: Dictionary of HTTP headers
    :type headers: Dict[str, Any]
    :return: Sanitized copy of the headers
    :rtype: Dict[str, Any]
    """
    if not headers:
        return headers
    sanitized = copy.deepcopy(dict(headers))
    for key, value in sanitized.items():
        if key.lower() in SENSITIVE_HEADERS:
            if isinstance(value, str) and len(value) > 0:
                sanitized[key] = f"<REDACTED:length={len(value)}>"
            else:
                sanitized[key] = "<REDACTED>"
        elif isinstance(value, str):
            sanitized[key] = sanitize_string(value)
    return sanitized


class SanitizingFormatter(logging.Formatter):
    """Formatter that automatically sanitizes sensitive data."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with automatic sanitization.

        :param record: Log record to format
        :type record: logging.LogRecord
        :return: Sanitized log message
        :rtype: str
        """
        # Other handlers may share the record; only the copy is rewritten.
        record = copy.copy(record)
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            message = f"{record.msg} {record.args!r}"
        record.msg = sanitize_string(message)
        record.args = None
        return super().format(record)


_LOGGING_CONFIGURED = False


def setup_logging(level: str = "INFO", force: bool = False) -> None:
    """Configure the ``megaport_client`` logger with sanitized output.

    Only the package logger is touched; the root logger is left to the
    application. ``NONE`` silences the package entirely.

    :param level: Level name (TRACE, DEBUG, INFO, WARN, ERROR, FATAL, NONE)
    :type level: str
    :param force: Reconfigure even if logging was already set up
    :type force: bool
    :return: None
    :rtype: None
    """
    global _LOGGING_CONFIGURED

    package_logger = logging.getLogger("megaport_client")
    package_logger.setLevel(string_to_log_level(level))

    if _LOGGING_CONFIGURED and not force:
        package_logger.debug("Logging already configured, only level updated")
        return

    formatter = SanitizingFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    package_logger.handlers = [handler]
    package_logger.propagate = False

    _LOGGING_CONFIGURED = True
