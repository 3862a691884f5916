"""AI system components.

This package contains the opponent's decision logic:
- opponent_policy.py: Health-threshold spell selection with an injectable random source
"""

from .opponent_policy import (
    OpponentBehavior,
    OpponentDecision,
    ThresholdPolicy,
    HealthBand,
    classify_health,
    choose_spell_id,
    create_opponent_policy,
)

__all__ = [
    "OpponentBehavior",
    "OpponentDecision",
    "ThresholdPolicy",
    "HealthBand",
    "classify_health",
    "choose_spell_id",
    "create_opponent_policy",
]
