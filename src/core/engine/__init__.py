"""Core battle engine state.

- battle_state.py: Turn state machine phases, half-turn records and battle state
"""

from .battle_state import BattleState, BattlePhase, TurnRecord, PHASE_TRANSITIONS

__all__ = [
    "BattleState",
    "BattlePhase",
    "TurnRecord",
    "PHASE_TRANSITIONS",
]
