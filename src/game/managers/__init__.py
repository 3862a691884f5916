"""Manager systems for battle coordination.

This package contains manager classes that coordinate cross-cutting
concerns through the event-driven architecture.
"""

from .log_manager import LogManager, LogLevel, LogCategory, LogEntry

__all__ = [
    "LogManager",
    "LogLevel",
    "LogCategory",
    "LogEntry",
]
