"""Data classes for actor and spell definitions.

Definition files are two independent id -> record tables. Field names follow
the definition file format (``hp``, ``atk``, ``def``, ``desc``, ...) and are
mapped onto engine names here.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from ...core.data import Element, parse_element
from ..entities.spell import Spell


@dataclass(frozen=True)
class ActorRecord:
    """An actor definition as stored in the actor catalog."""

    actor_id: str
    name: str
    max_health: int
    attack: int
    defense: int
    description: str = ""
    weakness: Optional[Element] = None
    spell_ids: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, actor_id: str, data: dict[str, Any]) -> "ActorRecord":
        """Create an actor record from YAML data.

        Raises:
            KeyError: if a required field is missing
            ValueError: if a numeric field cannot be converted or hp is not positive
        """
        max_health = int(data["hp"])
        if max_health <= 0:
            raise ValueError(f"hp must be positive, got {max_health}")

        return cls(
            actor_id=actor_id,
            name=str(data["name"]),
            max_health=max_health,
            attack=int(data["atk"]),
            defense=int(data["def"]),
            description=str(data.get("desc") or ""),
            weakness=parse_element(data.get("weakness")),
            spell_ids=tuple(str(spell_id) for spell_id in data.get("spells") or ()),
        )


def spell_from_dict(spell_id: str, data: dict[str, Any]) -> Spell:
    """Create a spell from YAML data.

    Raises:
        KeyError: if a required field is missing
        ValueError: if ``damage`` is not an integer
    """
    return Spell(
        spell_id=spell_id,
        name=str(data["name"]),
        power=int(data["damage"]),
        description=str(data.get("desc") or ""),
        element=parse_element(data.get("element")),
    )
