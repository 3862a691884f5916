"""Combat system components.

- attack_resolver.py: Weakness scaling, heal/damage dispatch and health clamping
"""

from .attack_resolver import (
    AttackResult,
    WEAKNESS_MULTIPLIER,
    calculate_effective_power,
    resolve_attack,
    round_half_up,
)

__all__ = [
    "AttackResult",
    "WEAKNESS_MULTIPLIER",
    "calculate_effective_power",
    "resolve_attack",
    "round_half_up",
]
