"""Spell definitions.

A spell is an immutable value: it is built once (explicitly or from the spell
catalog) and may be shared freely between actors and turns.
"""

from dataclasses import dataclass
from typing import Optional

from ...core.data import Element, element_display_name

# Spells with this name heal their caster instead of damaging the target
HEAL_SPELL_NAME = "Heal"


@dataclass(frozen=True)
class Spell:
    """An attack or heal definition.

    ``power`` is signed: negative values are healing amounts, zero and
    positive values are damage. It has no enforced range.
    """
    spell_id: str
    name: str
    power: int
    description: str = ""
    element: Optional[Element] = None

    def __post_init__(self):
        if not self.spell_id:
            raise ValueError("Spell id cannot be empty")

    @property
    def is_heal(self) -> bool:
        """Whether this is the reserved healing spell (matched by name)."""
        return self.name == HEAL_SPELL_NAME

    def describe(self) -> str:
        """Multi-line information card for the spell."""
        description = self.description or "No Data Available."
        return (
            f"~~~'{self.name}' Spell~~~\n"
            f"Damage: {self.power} Element: {element_display_name(self.element)}\n"
            f"Description: {description}"
        )

    def __str__(self) -> str:
        return self.name
