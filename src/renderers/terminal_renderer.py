import sys
from typing import Optional, TextIO

from ..core.data import BattleOutcome
from ..core.renderer import Renderer, RendererConfig
from ..core.renderable import BattleRenderContext, MessageRenderData, StatusRenderData

PANEL_INNER_WIDTH = 64
MESSAGE_WIDTH = PANEL_INNER_WIDTH - 2
SPELL_COLUMN_WIDTH = 40
SPELL_ROWS = 3
SPELLS_PER_ROW = 5
PLAYER_NAME_WIDTH = 9
OPPONENT_NAME_WIDTH = 12

INTRO_MESSAGE = "Battle Start! Enter your chosen spell to attack!"
INVALID_CHOICE_MESSAGE = "ERROR: You do not have that spell."

PLAYER_BANNER = [
    r"   ___ _                         __    __ _          ",
    r"  / _ \ | __ _ _   _ ___ _ __   / / /\ \ (_)_ __  ___",
    r" / /_)/ |/ _` | | | |/ _ \ '__| \ \/  \/ / | '_ \/ __|",
    r"/ ___/| | (_| | |_| |  __/ |     \  /\  /| | | | \__ \ ",
    r"\/    |_|\__,_|\__, |\___|_|      \/  \/ |_|_| |_|___/",
    r"               |___/                                  ",
]

OPPONENT_BANNER = [
    r"  _____                             __        ___           ",
    r" | ____|_ __   ___ _ __ ___  _   _  \ \      / (_)_ __  ___ ",
    r" |  _| | '_ \ / _ \ '_ ` _ \| | | |  \ \ /\ / /| | '_ \/ __|",
    r" | |___| | | |  __/ | | | | | |_| |   \ V  V / | | | | \__ \ ",
    r" |_____|_| |_|\___|_| |_| |_|\__, |    \_/\_/  |_|_| |_|___/",
    r"                             |___/                          ",
]


def rgb(red: int, green: int, blue: int) -> str:
    """24-bit ANSI foreground colour."""
    return f"\033[38;2;{red};{green};{blue}m"


def victory_text(victor: StatusRenderData) -> str:
    return f"{victor.name} Wins! {victor.health}/{victor.max_health}HP remained!"


class TerminalRenderer(Renderer):
    """Draws the battle as a fixed 66-column framed console panel."""

    def __init__(self, config: Optional[RendererConfig] = None, stream: Optional[TextIO] = None):
        super().__init__(config)
        self.stream = stream if stream is not None else sys.stdout
        self._buffer: list[str] = []
        self._prompt = ""

        # Panel colours (ANSI 24-bit)
        self.panel_colors = {
            "border": rgb(56, 39, 170),
            "digit": rgb(113, 186, 135),
            "text": rgb(113, 128, 185),
            "label": rgb(163, 231, 252),
        }

        # Terminal control codes
        self.terminal_codes = {
            "reset": "\033[0m",
            "clear_screen": "\033[2J",
            "cursor_home": "\033[H",
            "text_error": "\033[91m",  # Red
        }

        # Fixed panel pieces
        self.long_bar = "+" + "-" * PANEL_INNER_WIDTH + "+"
        self.empty_bar = "|" + " " * PANEL_INNER_WIDTH + "|"
        self.spell_right_area = "|" + " " * 22 + "|"
        self.bottom_bar = "/// Enter Spell Name " + "-" * 21 + "+" + "-" * 22 + "+"

    def initialize(self) -> None:
        # Window title and size
        self._write(f"\033]0;{self.config.title}\007")
        self._write(f"\033[8;{self.config.height};{self.config.width}t")
        self.clear()

    def cleanup(self) -> None:
        self._write(self.terminal_codes["reset"])
        self.stream.flush()

    def clear(self) -> None:
        self._write(self.terminal_codes["clear_screen"] + self.terminal_codes["cursor_home"])

    def present(self) -> None:
        self.clear()
        for line in self._buffer:
            self._write(line + "\n")
        if self._prompt:
            self._write(self._prompt)
        self.stream.flush()
        self._buffer.clear()
        self._prompt = ""

    # ============== Presenter Hooks ==============

    def render_frame(self, context: BattleRenderContext) -> None:
        self._buffer.clear()
        self._render_status_lines(context)

        if context.show_intro:
            self._render_message_line(INTRO_MESSAGE)
            self._render_empty_lines(4)
        else:
            self._render_message_pair(context.player_message)
            self._render_empty_lines(1)
            self._render_message_pair(context.opponent_message)

        self._render_spell_list(context.spell_names)
        self._prompt = "/// "
        self.present()

    def show_invalid_choice(self, context: BattleRenderContext, raw_input: str) -> None:
        self._buffer.clear()
        self._render_status_lines(context)
        self._render_message_line(INVALID_CHOICE_MESSAGE, "text_error")
        self._render_message_line(f"'{raw_input}' is not in your spell list. Try again.")
        self._render_empty_lines(3)
        self._render_spell_list(context.spell_names)
        self._prompt = "/// "
        self.present()

    def show_outcome(self, context: BattleRenderContext) -> None:
        self._buffer.clear()
        self._render_status_lines(context)
        self._buffer.append("")

        if context.outcome is not None:
            if context.outcome.outcome == BattleOutcome.PLAYER_VICTORY:
                self._buffer.extend(PLAYER_BANNER)
            else:
                self._buffer.extend(OPPONENT_BANNER)
            self._buffer.append("")
            self._buffer.append(victory_text(context.outcome.victor))

        if context.log_messages:
            self._buffer.append("")
            self._buffer.extend(context.log_messages)

        self.present()

    # ============== Panel Sections ==============

    def _render_status_lines(self, context: BattleRenderContext) -> None:
        """Top border, HP line, turn line and bottom border."""
        player = context.player
        opponent = context.opponent
        border = self._paint(self.long_bar, "border")

        self._buffer.append(border)
        self._buffer.append(
            self._paint("| ", "border")
            + self._paint(f"{player.name[:PLAYER_NAME_WIDTH]:<{PLAYER_NAME_WIDTH}}", "text")
            + self._paint(" HP: ", "label")
            + self._paint(f"{player.health:<6}", "digit")
            + self._paint("          -         ", "border")
            + self._paint(f"{opponent.name[:OPPONENT_NAME_WIDTH]:>{OPPONENT_NAME_WIDTH}}", "text")
            + self._paint(" HP: ", "label")
            + self._paint(f"{opponent.health:<5}", "digit")
            + self._paint(" |", "border")
        )
        self._buffer.append(
            self._paint("| ", "border")
            + self._paint("Turn: ", "label")
            + self._paint(f"{context.turn_count:<3}", "digit")
            + self._paint(" " * 54 + "|", "border")
        )
        self._buffer.append(border)

    def _render_message_pair(self, message: Optional[MessageRenderData]) -> None:
        if message is None:
            self._render_empty_lines(2)
            return
        self._render_message_line(message.message)
        self._render_message_line(message.extra_message or "")

    def _render_message_line(self, text: str, color: str = "text") -> None:
        body = self._paint(f"{text[:MESSAGE_WIDTH]:<{MESSAGE_WIDTH}}", color)
        self._buffer.append(self._paint("| ", "border") + body + self._paint(" |", "border"))

    def _render_empty_lines(self, count: int) -> None:
        for _ in range(count):
            self._buffer.append(self._paint(self.empty_bar, "border"))

    def _render_spell_list(self, spell_names: list[str]) -> None:
        """Spell List box: three rows of up to five comma separated names."""
        label_gap = " " * (PANEL_INNER_WIDTH - 13)
        self._buffer.append(self._paint("+------------+" + label_gap + "|", "border"))
        self._buffer.append(
            self._paint("| ", "border") + self._paint("Spell List", "label") + self._paint(" |" + label_gap + "|", "border")
        )
        self._buffer.append(self._paint("+------------+" + "-" * 28 + "+" + " " * 22 + "|", "border"))

        rows = [
            ", ".join(spell_names[start:start + SPELLS_PER_ROW])
            for start in range(0, len(spell_names), SPELLS_PER_ROW)
        ][:SPELL_ROWS]
        while len(rows) < SPELL_ROWS:
            rows.append("")

        for row in rows:
            self._buffer.append(
                self._paint("| ", "border")
                + self._paint(f"{row[:SPELL_COLUMN_WIDTH]:<{SPELL_COLUMN_WIDTH}}", "text")
                + self._paint(self.spell_right_area, "border")
            )
        self._buffer.append(self._paint(self.bottom_bar, "border"))

    # ============== Helpers ==============

    def _paint(self, text: str, color: str) -> str:
        if not self.config.use_color:
            return text
        code = self.panel_colors.get(color) or self.terminal_codes.get(color, "")
        return code + text + self.terminal_codes["reset"]

    def _write(self, text: str) -> None:
        print(text, end="", file=self.stream)

    def print_error(self, message: str) -> None:
        """Print an error line outside the panel."""
        self._write(self._paint(message, "text_error") + "\n")
        self.stream.flush()
