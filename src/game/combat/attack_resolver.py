"""
Attack resolution for spells cast by one actor on another.

This is the only place where actor health changes. The ordering of the steps
below, and which actor each step mutates, is relied upon by the battle
controller's victory checks.

Resolution steps:
1. Start from the spell's power.
2. Weakness: if the spell has an element equal to the *target's* weakness,
   scale by 1.25 (rounded half-up) and report the weakness hit.
3. Sign dispatch:
   - negative power on the Heal spell heals the *attacker*;
   - negative power on any other spell does nothing;
   - otherwise the target takes the damage.
4. Clamp the computed health against the *target's* maximum. An overflow
   resets the *attacker* to full health.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..entities.actor import Actor
from ..entities.spell import Spell

WEAKNESS_MULTIPLIER = 1.25


@dataclass(frozen=True)
class AttackResult:
    """Messages describing what a resolved spell did.

    ``message`` is empty when a non-heal spell had negative power.
    """
    message: str = ""
    extra_message: Optional[str] = None

    def as_tuple(self) -> tuple[str, Optional[str]]:
        return (self.message, self.extra_message)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding towards positive infinity."""
    return int(math.floor(value + 0.5))


def calculate_effective_power(spell: Spell, target: Actor) -> tuple[int, bool]:
    """Apply the weakness multiplier without touching any actor.

    Returns:
        (effective power, whether the target's weakness was hit)
    """
    if spell.element is not None and spell.element == target.weakness:
        return round_half_up(spell.power * WEAKNESS_MULTIPLIER), True
    return spell.power, False


def resolve_attack(attacker: Actor, target: Actor, spell: Spell) -> AttackResult:
    """Resolve ``spell`` cast by ``attacker`` on ``target``, mutating health.

    ``attacker`` and ``target`` may be the same actor (self-heal).

    Returns:
        AttackResult with the action message and optional weakness message
    """
    message = ""
    extra_message = None

    damage, weakness_hit = calculate_effective_power(spell, target)
    if weakness_hit:
        extra_message = f"Hit {target.name}'s weakness!"

    if damage < 0 and spell.is_heal:
        new_health = attacker.health - damage
        attacker.health = new_health
        message = f"{attacker.name} healed for {-damage} HP!"
    elif damage < 0:
        # Negative power only heals through the Heal spell; anything else is a no-op
        new_health = target.health
    else:
        new_health = target.health - damage
        message = f"{attacker.name} used {spell.name}! Dealt {damage} damage to {target.name}!"

    if new_health > target.max_health:
        # Quirk: overflowing the target's maximum restores the attacker, not the target
        attacker.health = attacker.max_health
    elif new_health < 0:
        target.health = 0
    elif not spell.is_heal:
        target.health = new_health

    return AttackResult(message=message, extra_message=extra_message)
