"""Battle actors and their spell repertoires.

An :class:`Actor` is a plain combat record. The player's extra capability,
knowing a set of spells, is attached by composition through an optional
:class:`SpellRepertoire` instead of a subclass::

    opponent = Actor("Bot", max_health=120, attack=8, defense=4)
    player = Actor("Hero", max_health=100, attack=10, defense=6,
                   repertoire=SpellRepertoire([attack, fire, heal]))

    player.is_player    # True
    opponent.is_player  # False

Health is only ever changed by :func:`resolve_attack`.
"""

from typing import Iterable, Iterator, Optional

from ...core.data import Element, element_display_name
from .spell import Spell


class SpellRepertoire:
    """Ordered collection of known spells, unique by spell *name*.

    Adding a spell whose name is already known is silently ignored, even when
    the spell ids differ.
    """

    def __init__(self, spells: Iterable[Spell] = ()):
        self._spells: list[Spell] = []
        for spell in spells:
            self.add_spell(spell)

    def add_spell(self, spell: Spell) -> bool:
        """Append a spell unless one with the same name is already known.

        Returns:
            True if the spell was added, False if it was a duplicate
        """
        if any(known.name == spell.name for known in self._spells):
            return False
        self._spells.append(spell)
        return True

    def knows(self, spell_id: str) -> bool:
        """Check whether a spell id names one of the known spells."""
        return self.get(spell_id) is not None

    def get(self, spell_id: str) -> Optional[Spell]:
        for spell in self._spells:
            if spell.spell_id == spell_id:
                return spell
        return None

    @property
    def spells(self) -> tuple[Spell, ...]:
        return tuple(self._spells)

    @property
    def names(self) -> list[str]:
        return [spell.name for spell in self._spells]

    def format_list(self, per_line: int = 5) -> str:
        """Format the spell names as ``"A - B - C"``, wrapping every ``per_line`` names."""
        parts = []
        for index, spell in enumerate(self._spells):
            parts.append(spell.name)
            if index == len(self._spells) - 1:
                break
            parts.append(" - \n" if (index + 1) % per_line == 0 else " - ")
        return "".join(parts)

    def __iter__(self) -> Iterator[Spell]:
        return iter(self._spells)

    def __len__(self) -> int:
        return len(self._spells)

    def __contains__(self, spell: object) -> bool:
        return spell in self._spells


class Actor:
    """A combat participant.

    ``attack`` and ``defense`` are part of the actor record but do not take
    part in damage resolution.
    """

    def __init__(
        self,
        name: str,
        max_health: int,
        attack: int = 0,
        defense: int = 0,
        description: str = "",
        weakness: Optional[Element] = None,
        repertoire: Optional[SpellRepertoire] = None,
        actor_id: Optional[str] = None,
    ):
        """Initialize an actor at full health.

        Args:
            name: Display name
            max_health: Maximum (and starting) health, must not be negative
            attack: Attack stat
            defense: Defense stat
            description: Flavour text
            weakness: Element that amplifies damage taken, None for no weakness
            repertoire: Known spells; present only for the player-controlled actor
            actor_id: Catalog id this actor was built from, if any
        """
        if max_health < 0:
            raise ValueError(f"Max health cannot be negative, got {max_health}")

        self.name = name
        self.max_health = max_health
        self.health = max_health
        self.attack = attack
        self.defense = defense
        self.description = description
        self.weakness = weakness
        self.repertoire = repertoire
        self.actor_id = actor_id

    @property
    def is_player(self) -> bool:
        """Whether this actor carries a spell repertoire."""
        return self.repertoire is not None

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def health_ratio(self) -> float:
        """Current health as a fraction of maximum (0.0 to 1.0)."""
        if self.max_health <= 0:
            return 0.0
        return self.health / self.max_health

    @property
    def known_spells(self) -> tuple[Spell, ...]:
        if self.repertoire is None:
            return ()
        return self.repertoire.spells

    def add_spell(self, spell: Spell) -> bool:
        """Teach the actor a spell, deduplicated by name."""
        if self.repertoire is None:
            raise ValueError(f"{self.name} has no spell repertoire")
        return self.repertoire.add_spell(spell)

    def describe(self) -> str:
        """Multi-line status card for the actor."""
        return (
            "~~STATUS INFORMATION~~\n"
            f"Name: {self.name}\n"
            f"HP: {self.health} / {self.max_health}\n"
            f"ATK: {self.attack} DEF: {self.defense}\n"
            f"Weakness: {element_display_name(self.weakness)}"
        )

    def __repr__(self) -> str:
        return f"Actor({self.name!r}, {self.health}/{self.max_health})"
