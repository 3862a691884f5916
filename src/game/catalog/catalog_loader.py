"""
Catalog loading for actor and spell definitions.

Actor and spell definitions live in two YAML files, each a mapping from a
stable id to a record. Catalogs read their file once and resolve records by
id on demand; failures surface as :class:`ConfigurationError` so that the
caller decides how to report them.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, TypeVar, Union

import yaml

from ...core.errors import NotFoundError, SourceUnavailableError
from ...core.events.events import LogMessage
from ..entities.spell import Spell
from ..managers.log_manager import LogLevel
from .catalog_structures import ActorRecord, spell_from_dict

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager

TRecord = TypeVar("TRecord")


def load_definitions(file_path: Union[str, Path]) -> dict[str, dict[str, Any]]:
    """Read a YAML definition table.

    Args:
        file_path: Path to a YAML file whose top level maps ids to records

    Returns:
        The raw id -> record mapping

    Raises:
        SourceUnavailableError: if the file is missing, unreadable, not valid
            YAML or not a mapping
    """
    path = Path(file_path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise SourceUnavailableError("Definition file not found", str(path))
    except OSError as e:
        raise SourceUnavailableError(f"Could not read definition file: {e}", str(path))
    except yaml.YAMLError as e:
        raise SourceUnavailableError(f"Failed to parse YAML definitions: {e}", str(path))

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SourceUnavailableError("Definition file must contain a mapping of ids to records", str(path))

    return {str(key): value for key, value in data.items()}


class _Catalog(Generic[TRecord]):
    """Shared id lookup with per-record parsing and caching."""

    entry_type = "entry"

    def __init__(
        self,
        definitions: dict[str, dict[str, Any]],
        parser: Callable[[str, dict[str, Any]], TRecord],
        source: str = "<memory>",
        event_manager: Optional["EventManager"] = None,
    ):
        self._definitions = definitions
        self._parser = parser
        self._cache: dict[str, TRecord] = {}
        self.source = source
        self.event_manager = event_manager

    def lookup(self, entry_id: str) -> TRecord:
        """Resolve an id to its record.

        Raises:
            NotFoundError: if the id is not defined
            SourceUnavailableError: if the record exists but is malformed
        """
        if entry_id in self._cache:
            return self._cache[entry_id]

        data = self._definitions.get(entry_id)
        if not isinstance(data, dict):
            self._emit_log(f"{self.entry_type.capitalize()} ID '{entry_id}' not found", "ERROR")
            raise NotFoundError(self.entry_type, entry_id, self.source)

        try:
            record = self._parser(entry_id, data)
        except (KeyError, TypeError, ValueError) as e:
            raise SourceUnavailableError(
                f"Malformed {self.entry_type} definition '{entry_id}': {e!r}", self.source
            )

        self._cache[entry_id] = record
        self._emit_log(f"Loaded {self.entry_type} '{entry_id}'", "DEBUG")
        return record

    def _emit_log(self, message: str, level_name: str) -> None:
        if self.event_manager is None:
            return

        self.event_manager.publish(
            LogMessage(
                turn=0,
                message=message,
                category="CATALOG",
                level=LogLevel[level_name],
                source=self.__class__.__name__,
            ),
            source=self.__class__.__name__,
        )


class SpellCatalog(_Catalog[Spell]):
    """Spell definitions keyed by spell id."""

    entry_type = "spell"

    def __init__(self, definitions: dict[str, dict[str, Any]], source: str = "<memory>",
                 event_manager: Optional["EventManager"] = None):
        super().__init__(definitions, spell_from_dict, source, event_manager)

    @classmethod
    def from_file(cls, file_path: Union[str, Path],
                  event_manager: Optional["EventManager"] = None) -> "SpellCatalog":
        return cls(load_definitions(file_path), str(file_path), event_manager)

    def lookup_many(self, spell_ids: list[str]) -> list[Spell]:
        return [self.lookup(spell_id) for spell_id in spell_ids]


class ActorCatalog(_Catalog[ActorRecord]):
    """Actor definitions keyed by actor id."""

    entry_type = "actor"

    def __init__(self, definitions: dict[str, dict[str, Any]], source: str = "<memory>",
                 event_manager: Optional["EventManager"] = None):
        super().__init__(definitions, ActorRecord.from_dict, source, event_manager)

    @classmethod
    def from_file(cls, file_path: Union[str, Path],
                  event_manager: Optional["EventManager"] = None) -> "ActorCatalog":
        return cls(load_definitions(file_path), str(file_path), event_manager)
