"""Actor and spell definition catalogs.

- catalog_loader.py: YAML definition loading and id lookup
- catalog_structures.py: Record data classes for definition entries
"""

from .catalog_loader import ActorCatalog, SpellCatalog, load_definitions
from .catalog_structures import ActorRecord, spell_from_dict

__all__ = [
    "ActorCatalog",
    "SpellCatalog",
    "load_definitions",
    "ActorRecord",
    "spell_from_dict",
]
