"""Battle events and logging events.

This module defines all events that battle systems can subscribe to,
following the publisher-subscriber architecture of the event manager.

Event Design Principles:
- Events are immutable dataclasses with minimal payloads
- All events include the turn count at which they happened
- Events represent "what happened" with stable identifiers (names, spell ids)
- Events use proper enums instead of magic strings
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
from abc import ABC
from enum import Enum, auto

from ..data import Side, BattleOutcome

if TYPE_CHECKING:
    from ...game.managers.log_manager import LogLevel
    from ..engine.battle_state import BattlePhase


class EventType(Enum):
    """Types of events that managers can subscribe to."""
    # Battle flow
    BATTLE_STARTED = auto()
    TURN_STARTED = auto()
    BATTLE_PHASE_CHANGED = auto()
    BATTLE_ENDED = auto()

    # Combat
    SPELL_CAST = auto()
    ACTOR_DEFEATED = auto()

    # Player input
    INVALID_CHOICE = auto()

    # Logging
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all events."""
    turn: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class BattleStarted(GameEvent):
    """Event emitted when a battle loop begins."""
    player_name: str
    opponent_name: str

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.BATTLE_STARTED)


@dataclass(frozen=True)
class TurnStarted(GameEvent):
    """Event emitted when one side starts its half-turn."""
    side: Side
    actor_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_STARTED)


@dataclass(frozen=True)
class BattlePhaseChanged(GameEvent):
    """Event emitted when the battle state machine changes phase."""
    old_phase: "BattlePhase"
    new_phase: "BattlePhase"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BATTLE_PHASE_CHANGED)


@dataclass(frozen=True)
class SpellCast(GameEvent):
    """Event emitted after a spell has been resolved."""
    side: Side
    caster_name: str
    target_name: str
    spell_id: str
    spell_name: str
    message: str
    extra_message: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.SPELL_CAST)


@dataclass(frozen=True)
class ActorDefeated(GameEvent):
    """Event emitted when an actor's health reaches zero."""
    side: Side
    actor_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ACTOR_DEFEATED)


@dataclass(frozen=True)
class BattleEnded(GameEvent):
    """Event emitted when the battle reaches a terminal outcome."""
    outcome: BattleOutcome
    victor_name: str
    victor_health: int
    victor_max_health: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BATTLE_ENDED)


@dataclass(frozen=True)
class InvalidChoice(GameEvent):
    """Event emitted when the player names a spell they do not know."""
    raw_input: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.INVALID_CHOICE)


# Logging Events
@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str
    level: "LogLevel"
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(GameEvent):
    """Event emitted for debug-specific messages."""
    message: str
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(GameEvent):
    """Event emitted when the log should be written to disk."""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)
