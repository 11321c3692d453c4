"""Logging filter for redacting credentials from log messages."""

import logging
import re
from typing import Pattern


class SensitiveDataFilter(logging.Filter):
    """Filter to redact credentials from log messages.

    Redacts the service API key wherever it can surface: environment variable
    assignments, X-API-Key and Authorization headers, and key=value pairs.
    """

    def __init__(self):
        super().__init__()

        # Order matters - header patterns must run before the generic ones
        self.patterns: list[tuple[Pattern, str]] = [
            (
                re.compile(r"(Authorization):\s+(Bearer\s+)?([^\s,]+)", re.IGNORECASE),
                r"\1: ***REDACTED***",
            ),
            (
                re.compile(r"(X-API-Key):\s*([^\s,]+)", re.IGNORECASE),
                r"\1: ***REDACTED***",
            ),
            (
                re.compile(r"\b(API_KEY)=([^\s,\)]+)", re.IGNORECASE),
                r"\1=***REDACTED***",
            ),
            (
                re.compile(r"\bBearer\s+([A-Za-z0-9_\-\.=]+)", re.IGNORECASE),
                r"Bearer ***REDACTED***",
            ),
            (
                re.compile(
                    r"(api[_-]?key|apikey|token|secret|password)['\"]?\s*[:=]\s*['\"]?"
                    r"([A-Za-z0-9_\-\.]{16,})",
                    re.IGNORECASE,
                ),
                r"\1=***REDACTED***",
            ),
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact the record in place; the record is always passed on."""
        if record.msg:
            record.msg = self.redact(str(record.msg))

        # Args used in % formatting
        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._redact_value(arg) for arg in record.args)

        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)

        return True

    def _redact_value(self, value):
        # Only strings, so numeric args still format with %d
        if isinstance(value, str):
            return self.redact(value)
        return value

    def redact(self, text: str) -> str:
        """Apply redaction patterns to text."""
        for pattern, replacement in self.patterns:
            text = pattern.sub(replacement, text)
        return text
