"""Battle state management.

This module defines the :class:`BattleState` owned by the battle controller
along with the phases of the turn state machine and the per-half-turn
records handed to presenters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from ..data import BattleOutcome, Side

if TYPE_CHECKING:
    from ...game.entities.actor import Actor


class BattlePhase(Enum):
    """Phases of the turn state machine."""

    AWAITING_PLAYER_CHOICE = auto()
    RESOLVING_PLAYER_TURN = auto()
    AWAITING_OPPONENT_CHOICE = auto()
    RESOLVING_OPPONENT_TURN = auto()

    # Terminal phases
    PLAYER_VICTORY = auto()
    OPPONENT_VICTORY = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (BattlePhase.PLAYER_VICTORY, BattlePhase.OPPONENT_VICTORY)


# Legal transitions; terminal phases have none
PHASE_TRANSITIONS: dict[BattlePhase, frozenset[BattlePhase]] = {
    BattlePhase.AWAITING_PLAYER_CHOICE: frozenset({BattlePhase.RESOLVING_PLAYER_TURN}),
    BattlePhase.RESOLVING_PLAYER_TURN: frozenset({
        BattlePhase.AWAITING_OPPONENT_CHOICE,
        BattlePhase.PLAYER_VICTORY,
        BattlePhase.OPPONENT_VICTORY,
    }),
    BattlePhase.AWAITING_OPPONENT_CHOICE: frozenset({BattlePhase.RESOLVING_OPPONENT_TURN}),
    BattlePhase.RESOLVING_OPPONENT_TURN: frozenset({
        BattlePhase.AWAITING_PLAYER_CHOICE,
        BattlePhase.PLAYER_VICTORY,
        BattlePhase.OPPONENT_VICTORY,
    }),
    BattlePhase.PLAYER_VICTORY: frozenset(),
    BattlePhase.OPPONENT_VICTORY: frozenset(),
}


@dataclass(frozen=True)
class TurnRecord:
    """What happened during one half-turn."""

    turn: int
    side: Side
    caster_name: str
    target_name: str
    spell_id: str
    spell_name: str
    message: str
    extra_message: Optional[str] = None

    @property
    def messages(self) -> tuple[str, Optional[str]]:
        return (self.message, self.extra_message)


@dataclass
class BattleState:
    """State of a single battle between the player and one opponent."""

    player: "Actor"
    opponent: "Actor"
    turn_count: int = 0
    phase: BattlePhase = BattlePhase.AWAITING_PLAYER_CHOICE
    outcome: Optional[BattleOutcome] = None
    last_player_turn: Optional[TurnRecord] = None
    last_opponent_turn: Optional[TurnRecord] = None
    history: list[TurnRecord] = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    def can_transition_to(self, phase: BattlePhase) -> bool:
        return phase in PHASE_TRANSITIONS[self.phase]

    def record_turn(self, record: TurnRecord) -> None:
        """Store a half-turn record as the latest for its side."""
        self.history.append(record)
        if record.side == Side.PLAYER:
            self.last_player_turn = record
        else:
            self.last_opponent_turn = record

    def victor(self) -> Optional["Actor"]:
        if self.outcome == BattleOutcome.PLAYER_VICTORY:
            return self.player
        if self.outcome == BattleOutcome.OPPONENT_VICTORY:
            return self.opponent
        return None
