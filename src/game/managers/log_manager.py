"""
Log management system for battle messages and debugging.

This module provides centralized logging with categorization, filtering,
and bounded storage. Components never write to the log directly: they
publish ``LogMessage`` events and the LogManager collects them.
"""
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ...core.events.events import EventType

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()     # System messages (initialization, loading, etc.)
    BATTLE = auto()     # Combat-related messages
    INPUT = auto()      # Player input messages
    CATALOG = auto()    # Actor/spell definition loading
    DEBUG = auto()      # Debug messages
    ERROR = auto()      # Error messages


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.BATTLE: "BTL",
    LogCategory.INPUT: "INP",
    LogCategory.CATALOG: "CAT",
    LogCategory.DEBUG: "DBG",
    LogCategory.ERROR: "ERR",
}


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class LogEntry:
    """A single stored log message with metadata."""
    text: str
    category: LogCategory
    level: LogLevel = LogLevel.INFO
    turn: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        """Format the message for display."""
        parts = []

        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")

        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")

        parts.append(self.text)
        return " ".join(parts)


class LogManager:
    """Manages battle logging with categorization and filtering."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO,
        log_dir: str = "logs",
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager for event-driven logging (required)
            max_messages: Maximum number of messages to store in the buffer
            default_level: Default log level for filtering
            log_dir: Directory that saved log files are written to
        """
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.event_manager = event_manager
        self.log_dir = log_dir

        # Categories below INFO are hidden unless debug is enabled
        self.category_levels = {
            LogCategory.DEBUG: LogLevel.DEBUG,
            LogCategory.INPUT: LogLevel.DEBUG,
            LogCategory.ERROR: LogLevel.ERROR,
        }

        self._setup_event_subscriptions()

    def _setup_event_subscriptions(self) -> None:
        self.event_manager.subscribe(
            EventType.LOG_MESSAGE,
            self._handle_log_message_event,
            subscriber_name="LogManager.log_message"
        )
        self.event_manager.subscribe(
            EventType.DEBUG_MESSAGE,
            self._handle_debug_message_event,
            subscriber_name="LogManager.debug_message"
        )
        self.event_manager.subscribe(
            EventType.SPELL_CAST,
            self._handle_spell_cast_event,
            subscriber_name="LogManager.spell_cast"
        )
        self.event_manager.subscribe(
            EventType.BATTLE_ENDED,
            self._handle_battle_ended_event,
            subscriber_name="LogManager.battle_ended"
        )
        self.event_manager.subscribe(
            EventType.LOG_SAVE_REQUESTED,
            self._handle_log_save_request,
            subscriber_name="LogManager.log_save_request"
        )

    def _handle_log_message_event(self, event) -> None:
        from ...core.events.events import LogMessage as LogEvent
        if not isinstance(event, LogEvent):
            return

        try:
            category = LogCategory[event.category.upper()]
        except (KeyError, AttributeError):
            category = LogCategory.SYSTEM

        level = event.level if isinstance(event.level, LogLevel) else LogLevel.INFO
        self.log(event.message, category, level=level, turn=event.turn)

    def _handle_debug_message_event(self, event) -> None:
        from ...core.events.events import DebugMessage
        if isinstance(event, DebugMessage):
            self.log(f"[{event.source}] {event.message}", LogCategory.DEBUG,
                     level=LogLevel.DEBUG, turn=event.turn)

    def _handle_spell_cast_event(self, event) -> None:
        from ...core.events.events import SpellCast
        if not isinstance(event, SpellCast):
            return

        # Non-heal spells with negative power produce no message
        if event.message:
            self.log(event.message, LogCategory.BATTLE, turn=event.turn)
        if event.extra_message:
            self.log(event.extra_message, LogCategory.BATTLE, turn=event.turn)

    def _handle_battle_ended_event(self, event) -> None:
        from ...core.events.events import BattleEnded
        if isinstance(event, BattleEnded):
            self.log(
                f"{event.victor_name} Wins! {event.victor_health}/{event.victor_max_health}HP remained!",
                LogCategory.BATTLE,
                turn=event.turn,
            )

    def _handle_log_save_request(self, event) -> None:
        if self.save_log_to_file() is not None:
            self.system("Log file saved successfully")
        else:
            self.error("Failed to save log file")

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM,
            level: LogLevel = LogLevel.INFO, turn: int = 0) -> None:
        """Add a message to the log.

        Messages are always stored; filtering only applies when reading.
        """
        self.messages.append(LogEntry(text=text, category=category, level=level, turn=turn))

    # Convenience methods for common categories
    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG, LogLevel.DEBUG)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR, LogLevel.ERROR)

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogEntry]:
        """Get recent messages, optionally filtered by category.

        Args:
            count: Maximum number of messages to return (None for all)
            categories: Set of categories to include (None for all,
                filtered by the current log level)

        Returns:
            List of recent messages, oldest first
        """
        filtered = []
        for msg in self.messages:
            if categories is not None:
                if msg.category in categories:
                    filtered.append(msg)
                continue

            message_level = self.category_levels.get(msg.category, msg.level)
            if message_level.value < self.log_level.value:
                continue
            filtered.append(msg)

        if count is not None and count < len(filtered):
            return filtered[-count:]
        return filtered

    def get_formatted_messages(self, count: Optional[int] = None) -> list[str]:
        return [msg.format() for msg in self.get_messages(count)]

    def save_log_to_file(self) -> Optional[str]:
        """Save all messages to a timestamped log file.

        Returns:
            Path of the written file, or None if it could not be written
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = os.path.join(self.log_dir, f"battle_{timestamp}.log")

        try:
            os.makedirs(self.log_dir, exist_ok=True)

            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("Spell Duel - Battle Log\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("=" * 60 + "\n\n")

                if not self.messages:
                    f.write("No messages to save.\n")

                # Every buffered message is written, regardless of current filters
                for msg in self.messages:
                    timestamp_str = msg.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
                    f.write(f"[{timestamp_str}] [{msg.category.name}] [turn {msg.turn}] {msg.text}\n")
        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return None

        self.system(f"Battle log saved to {filepath}")
        return filepath
