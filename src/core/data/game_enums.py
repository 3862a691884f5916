"""Centralized game enums and constants.

This module contains all core game enums that are used across multiple modules,
eliminating duplication and providing a single source of truth.
"""

from enum import Enum, auto
from typing import Optional


class Element(Enum):
    """Elemental tags carried by spells and actor weaknesses.

    "No element" is expressed as ``None`` wherever an ``Optional[Element]``
    is expected, never as a member of this enum.
    """
    FIRE = "fire"
    ICE = "ice"
    VOLT = "volt"


class Side(Enum):
    """The two sides of a duel."""
    PLAYER = 0
    OPPONENT = 1


class BattleOutcome(Enum):
    """Terminal results of a battle."""
    PLAYER_VICTORY = 1
    OPPONENT_VICTORY = 2


class TargetKind(Enum):
    """Who a chosen spell is cast on, relative to the caster."""
    OPPONENT = auto()
    SELF = auto()


# Convenience mappings for display
ELEMENT_NAMES = {
    Element.FIRE: "Fire",
    Element.ICE: "Ice",
    Element.VOLT: "Volt",
}


def parse_element(value: Optional[str]) -> Optional[Element]:
    """Parse an element tag from definition data.

    Matching is case-insensitive. ``None``, ``"none"`` and any unknown tag
    all map to ``None`` (no element).
    """
    if value is None:
        return None
    try:
        return Element(str(value).strip().lower())
    except ValueError:
        return None


def element_display_name(element: Optional[Element]) -> str:
    """Get the capitalized display name of an element, ``"None"`` for no element."""
    if element is None:
        return "None"
    return ELEMENT_NAMES[element]
