"""Battle entities.

This package contains the combat participants and their definitions:
- spell.py: Immutable spell values
- actor.py: Actors and the composable spell repertoire
- actor_templates.py: Actor construction from catalog records
"""

from .spell import Spell, HEAL_SPELL_NAME
from .actor import Actor, SpellRepertoire
from .actor_templates import actor_from_record, create_actor, create_player_actor

__all__ = [
    "Spell",
    "HEAL_SPELL_NAME",
    "Actor",
    "SpellRepertoire",
    "actor_from_record",
    "create_actor",
    "create_player_actor",
]
