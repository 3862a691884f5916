"""Core data definitions.

This package contains fundamental game definitions:
- game_enums.py: Centralized enums for elements, sides and battle outcomes
"""

from .game_enums import (
    Element,
    Side,
    BattleOutcome,
    TargetKind,
    ELEMENT_NAMES,
    parse_element,
    element_display_name,
)

__all__ = [
    "Element",
    "Side",
    "BattleOutcome",
    "TargetKind",
    "ELEMENT_NAMES",
    "parse_element",
    "element_display_name",
]
