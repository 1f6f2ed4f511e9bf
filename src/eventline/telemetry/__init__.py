"""
Telemetry module for eventline.

Provides structured logging with sensitive data masking.
"""

from eventline.telemetry.logger import (
    EventlineLogger,
    JsonFormatter,
    LogLevel,
    SensitiveDataMasker,
    TextFormatter,
    get_logger,
)

__all__ = [
    "EventlineLogger",
    "JsonFormatter",
    "LogLevel",
    "SensitiveDataMasker",
    "TextFormatter",
    "get_logger",
]
