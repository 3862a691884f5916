"""
Battle orchestration.

The :class:`BattleController` owns one player actor and one opponent for the
length of a battle and drives the turn state machine:

    AWAITING_PLAYER_CHOICE -> RESOLVING_PLAYER_TURN
        -> AWAITING_OPPONENT_CHOICE -> RESOLVING_OPPONENT_TURN -> (loop)

ending in PLAYER_VICTORY or OPPONENT_VICTORY as soon as either actor's
health reaches zero. A player win ends the battle before the opponent gets
another action.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ..core.data import BattleOutcome, Side, TargetKind
from ..core.engine.battle_state import BattlePhase, BattleState, TurnRecord
from ..core.events.event_manager import EventManager
from ..core.events.events import (
    ActorDefeated,
    BattleEnded,
    BattlePhaseChanged,
    BattleStarted,
    DebugMessage,
    InvalidChoice,
    LogMessage,
    SpellCast,
    TurnStarted,
)
from .combat.attack_resolver import resolve_attack
from .managers.log_manager import LogLevel
from .render_builder import RenderBuilder

if TYPE_CHECKING:
    from ..core.input import ChoiceProvider
    from ..core.renderer import Renderer
    from .ai.opponent_policy import OpponentBehavior
    from .entities.actor import Actor
    from .entities.spell import Spell
    from .managers.log_manager import LogManager


@dataclass
class BattleReport:
    """Summary of a finished battle."""
    outcome: BattleOutcome
    victor_name: str
    turn_count: int
    history: list[TurnRecord] = field(default_factory=list)

    @property
    def messages(self) -> list[tuple[str, Optional[str]]]:
        return [record.messages for record in self.history]


def normalize_choice(raw_choice: str) -> str:
    """Spell ids are matched lower-cased with surrounding whitespace removed."""
    return raw_choice.strip().lower()


class BattleController:
    """Drives a single battle between the player and one opponent."""

    def __init__(
        self,
        player: "Actor",
        opponent: "Actor",
        policy: "OpponentBehavior",
        event_manager: Optional[EventManager] = None,
        log_manager: Optional["LogManager"] = None,
    ):
        """Set up a battle at turn 0, waiting for the player's first choice.

        Raises:
            ValueError: if the player has no spell repertoire, or either actor
                starts the battle with no health
        """
        if not player.is_player:
            raise ValueError(f"{player.name} has no spell repertoire and cannot be the player")
        if player.health <= 0 or opponent.health <= 0:
            raise ValueError("Both actors must start the battle with health above zero")

        self.policy = policy
        self.event_manager = event_manager or EventManager()
        self.log_manager = log_manager
        self.state = BattleState(player=player, opponent=opponent)
        self.render_builder = RenderBuilder(self.state, log_manager)

    # ============== State Access ==============

    @property
    def player(self) -> "Actor":
        return self.state.player

    @property
    def opponent(self) -> "Actor":
        return self.state.opponent

    @property
    def phase(self) -> BattlePhase:
        return self.state.phase

    @property
    def turn_count(self) -> int:
        return self.state.turn_count

    @property
    def outcome(self) -> Optional[BattleOutcome]:
        return self.state.outcome

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def victor(self) -> Optional["Actor"]:
        return self.state.victor()

    # ============== Player Choice Validation ==============

    def is_valid_choice(self, raw_choice: str) -> bool:
        """Check whether the input names a spell the player knows."""
        repertoire = self.player.repertoire
        return repertoire is not None and repertoire.knows(normalize_choice(raw_choice))

    def _known_spell(self, raw_choice: str) -> "Spell":
        repertoire = self.player.repertoire
        spell = repertoire.get(normalize_choice(raw_choice)) if repertoire is not None else None
        if spell is None:
            raise ValueError(f"{self.player.name} does not know the spell '{raw_choice}'")
        return spell

    # ============== Half-Turns ==============

    def player_turn(self, spell_choice: str) -> TurnRecord:
        """Resolve the player's half-turn with an already validated choice.

        Raises:
            RuntimeError: if it is not the player's turn
            ValueError: if the choice does not name a known spell
        """
        self._require_phase(BattlePhase.AWAITING_PLAYER_CHOICE)
        spell = self._known_spell(spell_choice)

        self._set_phase(BattlePhase.RESOLVING_PLAYER_TURN)
        self.state.turn_count += 1
        self._publish(TurnStarted(turn=self.turn_count, side=Side.PLAYER, actor_name=self.player.name))

        record = self._cast(Side.PLAYER, self.player, self.opponent, spell)

        if not self._check_outcome(self.opponent, self.player):
            self._set_phase(BattlePhase.AWAITING_OPPONENT_CHOICE)

        self.event_manager.process_events()
        return record

    def opponent_turn(self) -> TurnRecord:
        """Let the opponent policy choose and resolve its half-turn.

        Raises:
            RuntimeError: if it is not the opponent's turn
        """
        self._require_phase(BattlePhase.AWAITING_OPPONENT_CHOICE)
        self._publish(TurnStarted(turn=self.turn_count, side=Side.OPPONENT, actor_name=self.opponent.name))

        decision = self.policy.choose(self.opponent)
        self._publish(DebugMessage(
            turn=self.turn_count,
            message=decision.reasoning,
            source=f"{self.policy.get_behavior_name()}Policy",
        ))
        target = self.opponent if decision.target == TargetKind.SELF else self.player

        self._set_phase(BattlePhase.RESOLVING_OPPONENT_TURN)
        record = self._cast(Side.OPPONENT, self.opponent, target, decision.spell)

        if not self._check_outcome(self.player, self.opponent):
            self._set_phase(BattlePhase.AWAITING_PLAYER_CHOICE)

        self.event_manager.process_events()
        return record

    # ============== Battle Loop ==============

    def run(self, choices: "ChoiceProvider", renderer: Optional["Renderer"] = None) -> BattleReport:
        """Run the battle to completion.

        Each loop iteration draws the panel, waits for a valid player choice
        (re-prompting on unknown spells), then resolves the player's and, if
        the battle is still going, the opponent's half-turn.

        Raises:
            RuntimeError: if the battle has already been played
            EOFError: if the choice provider runs out of input
        """
        if self.is_over or self.turn_count > 0:
            raise RuntimeError("Battle has already been played")

        self._publish(BattleStarted(turn=0, player_name=self.player.name, opponent_name=self.opponent.name))
        self._log(f"Battle started: {self.player.name} vs {self.opponent.name}", "BATTLE")
        self.event_manager.process_events()

        while self.player.health > 0 and self.opponent.health > 0:
            if renderer is not None:
                renderer.render_frame(self.render_builder.build_context())

            self.player_turn(self._await_valid_choice(choices, renderer))
            if self.is_over:
                break

            self.opponent_turn()
            if self.is_over:
                break

        if renderer is not None:
            renderer.show_outcome(self.render_builder.build_context())

        return self.report()

    def _await_valid_choice(self, choices: "ChoiceProvider", renderer: Optional["Renderer"]) -> str:
        while True:
            raw_choice = choices.next_choice()
            if self.is_valid_choice(raw_choice):
                return raw_choice

            self._publish(InvalidChoice(turn=self.turn_count, raw_input=raw_choice))
            self._log(f"Unknown spell choice '{raw_choice}'", "INPUT", LogLevel.DEBUG)
            self.event_manager.process_events()
            if renderer is not None:
                renderer.show_invalid_choice(self.render_builder.build_context(), raw_choice)

    def report(self) -> BattleReport:
        """Summarize the finished battle.

        Raises:
            RuntimeError: if the battle has no outcome yet
        """
        victor = self.victor
        if self.outcome is None or victor is None:
            raise RuntimeError("Battle is not over yet")
        return BattleReport(
            outcome=self.outcome,
            victor_name=victor.name,
            turn_count=self.turn_count,
            history=list(self.state.history),
        )

    # ============== Internals ==============

    def _cast(self, side: Side, caster: "Actor", target: "Actor", spell: "Spell") -> TurnRecord:
        result = resolve_attack(caster, target, spell)
        record = TurnRecord(
            turn=self.turn_count,
            side=side,
            caster_name=caster.name,
            target_name=target.name,
            spell_id=spell.spell_id,
            spell_name=spell.name,
            message=result.message,
            extra_message=result.extra_message,
        )
        self.state.record_turn(record)
        self._publish(SpellCast(
            turn=self.turn_count,
            side=side,
            caster_name=caster.name,
            target_name=target.name,
            spell_id=spell.spell_id,
            spell_name=spell.name,
            message=result.message,
            extra_message=result.extra_message,
        ))
        return record

    def _check_outcome(self, target: "Actor", caster: "Actor") -> bool:
        """Finish the battle if either actor is down, checking the target first."""
        for actor in (target, caster):
            if actor.health > 0:
                continue

            if actor is self.opponent:
                outcome, phase, side = BattleOutcome.PLAYER_VICTORY, BattlePhase.PLAYER_VICTORY, Side.OPPONENT
            else:
                outcome, phase, side = BattleOutcome.OPPONENT_VICTORY, BattlePhase.OPPONENT_VICTORY, Side.PLAYER

            self.state.outcome = outcome
            self._set_phase(phase)
            victor = self.state.victor()
            self._publish(ActorDefeated(turn=self.turn_count, side=side, actor_name=actor.name))
            self._publish(BattleEnded(
                turn=self.turn_count,
                outcome=outcome,
                victor_name=victor.name,
                victor_health=victor.health,
                victor_max_health=victor.max_health,
            ))
            return True
        return False

    def _require_phase(self, phase: BattlePhase) -> None:
        if self.state.phase != phase:
            raise RuntimeError(f"Expected phase {phase.name}, battle is in {self.state.phase.name}")

    def _set_phase(self, new_phase: BattlePhase) -> None:
        old_phase = self.state.phase
        if not self.state.can_transition_to(new_phase):
            raise RuntimeError(f"Illegal battle phase transition {old_phase.name} -> {new_phase.name}")
        self.state.phase = new_phase
        self._publish(BattlePhaseChanged(turn=self.turn_count, old_phase=old_phase, new_phase=new_phase))

    def _publish(self, event) -> None:
        self.event_manager.publish(event, source="BattleController")

    def _log(self, message: str, category: str = "BATTLE", level: LogLevel = LogLevel.INFO) -> None:
        self._publish(LogMessage(
            turn=self.turn_count,
            message=message,
            category=category,
            level=level,
            source="BattleController",
        ))
