"""Actor construction from catalog definitions.

This module turns catalog records into battle-ready :class:`Actor` objects.
Opponents are plain actors; the player additionally gets a spell repertoire
resolved from the record's spell id list.
"""

from typing import TYPE_CHECKING

from .actor import Actor, SpellRepertoire

if TYPE_CHECKING:
    from ..catalog.catalog_loader import ActorCatalog, SpellCatalog
    from ..catalog.catalog_structures import ActorRecord


def actor_from_record(record: "ActorRecord") -> Actor:
    """Create an actor without a repertoire from a catalog record."""
    return Actor(
        name=record.name,
        max_health=record.max_health,
        attack=record.attack,
        defense=record.defense,
        description=record.description,
        weakness=record.weakness,
        actor_id=record.actor_id,
    )


def create_actor(actor_id: str, actor_catalog: "ActorCatalog") -> Actor:
    """Create an opponent-style actor by catalog id.

    Raises:
        ConfigurationError: if the id cannot be resolved
    """
    return actor_from_record(actor_catalog.lookup(actor_id))


def create_player_actor(
    actor_id: str,
    actor_catalog: "ActorCatalog",
    spell_catalog: "SpellCatalog",
) -> Actor:
    """Create the player-controlled actor by catalog id.

    Spells are added in the order listed by the record; spells whose name is
    already known are skipped.

    Raises:
        ConfigurationError: if the actor id or any listed spell id cannot be resolved
    """
    record = actor_catalog.lookup(actor_id)
    actor = actor_from_record(record)
    actor.repertoire = SpellRepertoire(spell_catalog.lookup_many(list(record.spell_ids)))
    return actor
