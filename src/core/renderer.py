from abc import ABC, abstractmethod
from typing import Optional
from dataclasses import dataclass

from .renderable import BattleRenderContext


@dataclass
class RendererConfig:
    width: int = 66
    height: int = 17
    title: str = "RPG Prototype"
    use_color: bool = True


class Renderer(ABC):
    """Presenter for battle frames.

    The battle controller calls these hooks; how they are drawn is up to the
    implementation.
    """

    def __init__(self, config: Optional[RendererConfig] = None):
        self.config = config or RendererConfig()
        self._running = False

    @abstractmethod
    def initialize(self) -> None:
        pass

    @abstractmethod
    def cleanup(self) -> None:
        pass

    @abstractmethod
    def render_frame(self, context: BattleRenderContext) -> None:
        """Draw the status panel, latest messages and spell list."""
        pass

    @abstractmethod
    def show_invalid_choice(self, context: BattleRenderContext, raw_input: str) -> None:
        """Tell the player their choice was rejected and redraw the prompt."""
        pass

    @abstractmethod
    def show_outcome(self, context: BattleRenderContext) -> None:
        """Draw the final status panel and the victory banner."""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def present(self) -> None:
        pass

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True
        self.initialize()

    def stop(self) -> None:
        self._running = False
        self.cleanup()

    def get_screen_size(self) -> tuple[int, int]:
        return (self.config.width, self.config.height)
