"""
Structured Logging Module
Provides JSON-formatted logging for better integration with log aggregation tools
"""

import json
import logging
from typing import Any


class JSONFormatter(logging.Formatter):
    """
    Custom formatter that outputs log records as JSON.

    SECURITY STORY: Message content must never end up in logs. Callers that
    attach context via ``extra={"extra_fields": {...}}`` may accidentally
    pass a raw body or decoded payload; those fields are replaced with
    "[REDACTED]" while the field name is kept, so the log still shows that
    content was present.
    """

    # Fields that might carry message content - never log their values
    SENSITIVE_FIELDS = {
        'raw_body', 'body', 'payload', 'decoded'
    }

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: Python logging.LogRecord to format

        Returns:
            JSON string with structured log data
        """
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            filtered_extra = {
                k: self._sanitize_value(k, v)
                for k, v in record.extra_fields.items()
            }
            log_data.update(filtered_extra)

        return json.dumps(log_data, default=str)

    def _sanitize_value(self, key: str, value: Any) -> Any:
        """
        Replace the value of a sensitive field with "[REDACTED]".

        Args:
            key: Field name
            value: Field value

        Returns:
            Original value or "[REDACTED]" for sensitive fields
        """
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in self.SENSITIVE_FIELDS):
            return "[REDACTED]"
        return value
