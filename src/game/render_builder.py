"""
Render context building for the battle panel.

Converts battle state into the plain snapshots consumed by renderers, so a
renderer never holds a reference to a live actor.
"""
from typing import TYPE_CHECKING, Optional

from ..core.renderable import (
    BattleRenderContext,
    MessageRenderData,
    OutcomeRenderData,
    StatusRenderData,
)

if TYPE_CHECKING:
    from ..core.engine.battle_state import BattleState, TurnRecord
    from .entities.actor import Actor
    from .managers.log_manager import LogManager


class RenderBuilder:
    """Builds render contexts from battle state data."""

    def __init__(self, battle_state: "BattleState", log_manager: Optional["LogManager"] = None,
                 log_lines: int = 5):
        self.state = battle_state
        self.log_manager = log_manager
        self.log_lines = log_lines

    @staticmethod
    def status_of(actor: "Actor") -> StatusRenderData:
        return StatusRenderData(name=actor.name, health=actor.health, max_health=actor.max_health)

    @staticmethod
    def _message_of(record: Optional["TurnRecord"]) -> Optional[MessageRenderData]:
        if record is None:
            return None
        return MessageRenderData(message=record.message, extra_message=record.extra_message)

    def build_context(self) -> BattleRenderContext:
        """Snapshot the current battle state."""
        state = self.state
        show_intro = not state.history

        context = BattleRenderContext(
            player=self.status_of(state.player),
            opponent=self.status_of(state.opponent),
            turn_count=state.turn_count,
            player_message=self._message_of(state.last_player_turn),
            opponent_message=self._message_of(state.last_opponent_turn),
            spell_names=[spell.name for spell in state.player.known_spells],
            show_intro=show_intro,
        )

        victor = state.victor()
        if state.outcome is not None and victor is not None:
            context.outcome = OutcomeRenderData(outcome=state.outcome, victor=self.status_of(victor))

        if self.log_manager is not None:
            context.log_messages = self.log_manager.get_formatted_messages(self.log_lines)

        return context
