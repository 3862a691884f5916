"""Error types raised by the combat engine.

Configuration problems (a definition file that cannot be read, or an id that
is not defined in it) cannot be recovered from inside the engine. They are
raised as :class:`ConfigurationError` and left to the caller to report.
"""

from enum import Enum, auto


class ConfigErrorKind(Enum):
    """Why a configuration lookup failed."""
    NOT_FOUND = auto()           # The id is absent from the definition store
    SOURCE_UNAVAILABLE = auto()  # The definition store itself could not be read


class ConfigurationError(Exception):
    """Raised when actor or spell definitions cannot be resolved."""

    def __init__(self, kind: ConfigErrorKind, message: str, source: str = ""):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"{self.message} ({self.source})"
        return self.message


class NotFoundError(ConfigurationError):
    """An actor or spell id does not exist in its catalog."""

    def __init__(self, entry_type: str, entry_id: str, source: str = ""):
        super().__init__(
            ConfigErrorKind.NOT_FOUND,
            f"The {entry_type} ID '{entry_id}' does not exist",
            source,
        )
        self.entry_type = entry_type
        self.entry_id = entry_id


class SourceUnavailableError(ConfigurationError):
    """A catalog file is missing or could not be parsed."""

    def __init__(self, message: str, source: str = ""):
        super().__init__(ConfigErrorKind.SOURCE_UNAVAILABLE, message, source)
