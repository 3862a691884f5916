from dataclasses import dataclass, field
from typing import Optional

from .data import BattleOutcome


@dataclass
class StatusRenderData:
    """Health snapshot of one actor for the status line."""
    name: str
    health: int
    max_health: int

    @property
    def hp_percent(self) -> float:
        """Calculate HP as a percentage (0.0 to 1.0)."""
        return self.health / max(self.max_health, 1)


@dataclass
class MessageRenderData:
    """A message pair produced by one half-turn."""
    message: str = ""
    extra_message: Optional[str] = None


@dataclass
class OutcomeRenderData:
    """Terminal outcome and the actor that won."""
    outcome: BattleOutcome
    victor: StatusRenderData


@dataclass
class BattleRenderContext:
    """Everything a presenter needs to draw one frame of the battle panel.

    The presenter never sees actors or spells, only these snapshots.
    """
    player: StatusRenderData
    opponent: StatusRenderData
    turn_count: int = 0
    player_message: Optional[MessageRenderData] = None
    opponent_message: Optional[MessageRenderData] = None
    spell_names: list[str] = field(default_factory=list)
    show_intro: bool = False
    outcome: Optional[OutcomeRenderData] = None
    log_messages: list[str] = field(default_factory=list)
