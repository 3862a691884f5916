"""
Basic test fixtures for the spell duel test suite.

Provides spells, actors, catalogs written to temporary YAML files and a
seeded random generator for the opponent policy.
"""

import sys
import os

import numpy as np
import pytest
import yaml

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from src.core.data import Element
from src.core.events.event_manager import EventManager
from src.game.catalog.catalog_loader import ActorCatalog, SpellCatalog
from src.game.entities.actor import Actor, SpellRepertoire
from src.game.entities.spell import Spell


SPELL_DEFINITIONS = {
    "attack": {"name": "Attack", "damage": 10, "desc": "A plain strike.", "element": "none"},
    "fire": {"name": "Fire", "damage": 15, "desc": "Burns.", "element": "fire"},
    "ice": {"name": "Ice", "damage": 14, "desc": "Freezes.", "element": "ice"},
    "volt": {"name": "Volt", "damage": 16, "desc": "Shocks.", "element": "volt"},
    "heal": {"name": "Heal", "damage": -20, "desc": "Restores health.", "element": "none"},
}

ACTOR_DEFINITIONS = {
    "initplayer": {
        "name": "Hero", "hp": 120, "atk": 12, "def": 8, "desc": "The player.",
        "weakness": "none", "spells": ["attack", "fire", "ice", "volt", "heal"],
    },
    "bot": {
        "name": "Bot", "hp": 100, "atk": 10, "def": 10, "desc": "A training bot.",
        "weakness": "volt", "spells": ["attack"],
    },
}


class TestDataBuilder:
    """Builder for creating test actors and spells."""

    @staticmethod
    def spell(spell_id: str = "attack", name: str = "Attack", power: int = 10,
              element=None) -> Spell:
        return Spell(spell_id=spell_id, name=name, power=power, element=element)

    @staticmethod
    def heal(power: int = -20) -> Spell:
        return Spell(spell_id="heal", name="Heal", power=power)

    @staticmethod
    def actor(name: str = "Bot", max_health: int = 100, weakness=None, spells=None) -> Actor:
        repertoire = SpellRepertoire(spells) if spells is not None else None
        return Actor(name, max_health=max_health, weakness=weakness, repertoire=repertoire)


def write_yaml(path, data) -> str:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f)
    return str(path)


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def rng():
    """Seeded generator so opponent choices are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def spell_file(tmp_path):
    return write_yaml(tmp_path / "spells.yaml", SPELL_DEFINITIONS)


@pytest.fixture
def actor_file(tmp_path):
    return write_yaml(tmp_path / "actors.yaml", ACTOR_DEFINITIONS)


@pytest.fixture
def spell_catalog(spell_file):
    return SpellCatalog.from_file(spell_file)


@pytest.fixture
def actor_catalog(actor_file):
    return ActorCatalog.from_file(actor_file)


@pytest.fixture
def attack_spell():
    return TestDataBuilder.spell()


@pytest.fixture
def fire_spell():
    return TestDataBuilder.spell("fire", "Fire", 15, Element.FIRE)


@pytest.fixture
def heal_spell():
    return TestDataBuilder.heal()


@pytest.fixture
def player(attack_spell, fire_spell, heal_spell):
    """Player-controlled actor knowing attack, fire and heal."""
    return TestDataBuilder.actor("Hero", 120, spells=[attack_spell, fire_spell, heal_spell])


@pytest.fixture
def opponent():
    return TestDataBuilder.actor("Bot", 100, weakness=Element.VOLT)
