"""
Player input handling.

Choice providers turn raw input into spell choice strings for the battle
controller. Validation against the player's known spells is not done here;
the controller owns that predicate.
"""

import sys
from typing import TYPE_CHECKING, Iterable, Optional, TextIO

from ..core.events.events import LogMessage
from ..core.input import ChoiceProvider
from .managers.log_manager import LogLevel

if TYPE_CHECKING:
    from ..core.events.event_manager import EventManager


class ConsoleChoiceProvider(ChoiceProvider):
    """Reads one spell choice per line from a text stream (stdin by default)."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        event_manager: Optional["EventManager"] = None,
    ):
        self.stream = stream if stream is not None else sys.stdin
        self.event_manager = event_manager

    def next_choice(self) -> str:
        """Block until a line is available.

        Raises:
            EOFError: if the stream is exhausted
        """
        line = self.stream.readline()
        if not line:
            raise EOFError("Input stream closed while waiting for a spell choice")

        choice = line.rstrip("\r\n")
        if self.event_manager is not None:
            self.event_manager.publish(
                LogMessage(
                    turn=0,
                    message=f"Player entered '{choice}'",
                    category="INPUT",
                    level=LogLevel.DEBUG,
                    source="ConsoleChoiceProvider",
                ),
                source="ConsoleChoiceProvider",
            )
        return choice


class ScriptedChoiceProvider(ChoiceProvider):
    """Replays a fixed sequence of choices (demos and tests)."""

    def __init__(self, choices: Iterable[str]):
        self._choices = list(choices)
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._choices) - self._position

    def next_choice(self) -> str:
        if self._position >= len(self._choices):
            raise EOFError("Scripted choices exhausted")
        choice = self._choices[self._position]
        self._position += 1
        return choice
