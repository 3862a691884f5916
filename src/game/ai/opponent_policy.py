"""Opponent decision policy.

The opponent has no memory: every turn its choice depends only on how much
health it has left, with a coin flip in the lower two bands.

    health ratio > 0.75          -> attack the player
    0.35 < health ratio <= 0.75  -> fire or ice at the player
    health ratio <= 0.35         -> heal self or attack the player

The coin is drawn from an injected ``numpy.random.Generator`` so battles can
be replayed from a seed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

import numpy as np

from ...core.data import TargetKind
from ..entities.spell import Spell

if TYPE_CHECKING:
    from ..catalog.catalog_loader import SpellCatalog
    from ..entities.actor import Actor


ATTACK_SPELL_ID = "attack"
FIRE_SPELL_ID = "fire"
ICE_SPELL_ID = "ice"
HEAL_SPELL_ID = "heal"

HEALTHY_THRESHOLD = 0.75
CRITICAL_THRESHOLD = 0.35


class HealthBand(Enum):
    """Health bands that drive the opponent's choice."""
    HEALTHY = auto()    # ratio > 0.75
    WOUNDED = auto()    # 0.35 < ratio <= 0.75
    CRITICAL = auto()   # ratio <= 0.35


@dataclass(frozen=True)
class OpponentDecision:
    """A chosen spell and who it is cast on."""
    spell: Spell
    target: TargetKind
    band: HealthBand
    reasoning: str = ""


def classify_health(ratio: float) -> HealthBand:
    """Map a health ratio onto the policy's bands."""
    if ratio > HEALTHY_THRESHOLD:
        return HealthBand.HEALTHY
    if ratio > CRITICAL_THRESHOLD:
        return HealthBand.WOUNDED
    return HealthBand.CRITICAL


def choose_spell_id(ratio: float, rng: np.random.Generator) -> tuple[str, TargetKind]:
    """Pure decision function: health ratio and coin source to (spell id, target).

    The generator is only consumed in the two lower bands.
    """
    band = classify_health(ratio)

    if band == HealthBand.HEALTHY:
        return ATTACK_SPELL_ID, TargetKind.OPPONENT

    coin = int(rng.integers(0, 2))

    if band == HealthBand.WOUNDED:
        return (FIRE_SPELL_ID if coin == 1 else ICE_SPELL_ID), TargetKind.OPPONENT

    if coin == 1:
        return HEAL_SPELL_ID, TargetKind.SELF
    return ATTACK_SPELL_ID, TargetKind.OPPONENT


class OpponentBehavior(ABC):
    """Abstract base class for opponent decision strategies."""

    @abstractmethod
    def choose(self, opponent: "Actor") -> OpponentDecision:
        """Choose this turn's spell for the opponent.

        Args:
            opponent: The actor making the decision

        Returns:
            OpponentDecision with the spell and its target
        """
        pass

    @abstractmethod
    def get_behavior_name(self) -> str:
        pass


class ThresholdPolicy(OpponentBehavior):
    """Health-threshold policy with a coin flip in the lower bands."""

    def __init__(self, spell_catalog: "SpellCatalog", rng: Optional[np.random.Generator] = None):
        """Resolve the policy's spells up front.

        Args:
            spell_catalog: Catalog holding the attack, fire, ice and heal spells
            rng: Randomness source; a fresh unseeded generator if omitted

        Raises:
            ConfigurationError: if any of the policy's spell ids is not defined
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.spells: dict[str, Spell] = {
            spell_id: spell_catalog.lookup(spell_id)
            for spell_id in (ATTACK_SPELL_ID, FIRE_SPELL_ID, ICE_SPELL_ID, HEAL_SPELL_ID)
        }

    def choose(self, opponent: "Actor") -> OpponentDecision:
        ratio = opponent.health_ratio
        spell_id, target = choose_spell_id(ratio, self.rng)
        band = classify_health(ratio)

        return OpponentDecision(
            spell=self.spells[spell_id],
            target=target,
            band=band,
            reasoning=f"{opponent.name} at {ratio:.0%} health ({band.name.lower()}) chose {spell_id}",
        )

    def get_behavior_name(self) -> str:
        return "Threshold"


def create_opponent_policy(
    spell_catalog: "SpellCatalog",
    seed: Optional[int] = None,
) -> ThresholdPolicy:
    """Build the opponent policy with a generator seeded from ``seed``."""
    return ThresholdPolicy(spell_catalog, np.random.default_rng(seed))
