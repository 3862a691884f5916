from abc import ABC, abstractmethod


class ChoiceProvider(ABC):
    """Source of the player's spell choices.

    ``next_choice`` blocks until the player has entered something; there is
    no timeout and no cancellation. Providers that run out of input raise
    ``EOFError``.
    """

    @abstractmethod
    def next_choice(self) -> str:
        """Return the raw text of the player's next spell choice."""
        pass
