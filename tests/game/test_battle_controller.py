"""
Tests for the BattleController turn state machine.

The opponent is driven by a scripted policy so every half-turn is
deterministic; presenters are mocks.
"""
from unittest.mock import Mock

import pytest

from src.core.data import BattleOutcome, Side, TargetKind
from src.core.engine.battle_state import BattlePhase
from src.core.events.events import EventType
from src.game.ai.opponent_policy import HealthBand, OpponentBehavior, OpponentDecision
from src.game.battle_controller import BattleController, BattleReport, normalize_choice
from src.game.input_handler import ScriptedChoiceProvider
from src.game.managers.log_manager import LogManager


class ScriptedPolicy(OpponentBehavior):
    """Opponent policy that replays fixed decisions, repeating the last one."""

    def __init__(self, *decisions: OpponentDecision):
        self.decisions = list(decisions)
        self.calls = 0

    def choose(self, opponent):
        decision = self.decisions[min(self.calls, len(self.decisions) - 1)]
        self.calls += 1
        return decision

    def get_behavior_name(self) -> str:
        return "Scripted"


@pytest.fixture
def attack_decision(attack_spell):
    return OpponentDecision(attack_spell, TargetKind.OPPONENT, HealthBand.HEALTHY)


@pytest.fixture
def policy(attack_decision):
    return ScriptedPolicy(attack_decision)


@pytest.fixture
def controller(player, opponent, policy, event_manager):
    return BattleController(player, opponent, policy, event_manager)


class TestInitialization:
    """Test controller setup."""

    def test_initial_state(self, controller):
        assert controller.phase == BattlePhase.AWAITING_PLAYER_CHOICE
        assert controller.turn_count == 0
        assert controller.outcome is None
        assert controller.victor is None
        assert not controller.is_over

    def test_player_needs_repertoire(self, opponent, policy):
        with pytest.raises(ValueError):
            BattleController(opponent, opponent, policy)

    def test_actors_need_health(self, player, opponent, policy):
        opponent.health = 0
        with pytest.raises(ValueError):
            BattleController(player, opponent, policy)

    def test_report_before_end(self, controller):
        with pytest.raises(RuntimeError):
            controller.report()


class TestChoiceValidation:
    """Test the valid choice predicate."""

    @pytest.mark.parametrize("raw,expected", [
        ("attack", True),
        ("FIRE", True),
        ("  heal \n", True),
        ("volt", False),
        ("", False),
        ("Fire Ball", False),
    ])
    def test_is_valid_choice(self, controller, raw: str, expected: bool):
        assert controller.is_valid_choice(raw) is expected

    def test_normalize_choice(self):
        assert normalize_choice("  IcE\n") == "ice"

    def test_player_turn_rejects_unknown_spell(self, controller):
        with pytest.raises(ValueError):
            controller.player_turn("volt")
        assert controller.turn_count == 0
        assert controller.phase == BattlePhase.AWAITING_PLAYER_CHOICE


class TestHalfTurns:
    """Test individual player and opponent half-turns."""

    def test_player_turn(self, controller, player, opponent):
        record = controller.player_turn("attack")

        assert opponent.health == 90
        assert player.health == 120
        assert controller.turn_count == 1
        assert controller.phase == BattlePhase.AWAITING_OPPONENT_CHOICE
        assert record.side == Side.PLAYER
        assert record.message == "Hero used Attack! Dealt 10 damage to Bot!"

    def test_opponent_turn(self, controller, player):
        controller.player_turn("attack")
        record = controller.opponent_turn()

        assert player.health == 110
        assert controller.turn_count == 1
        assert controller.phase == BattlePhase.AWAITING_PLAYER_CHOICE
        assert record.side == Side.OPPONENT
        assert record.caster_name == "Bot"

    def test_turns_must_alternate(self, controller):
        with pytest.raises(RuntimeError):
            controller.opponent_turn()

        controller.player_turn("attack")
        with pytest.raises(RuntimeError):
            controller.player_turn("attack")

    def test_turn_count_increments_on_player_turns(self, controller):
        for expected in range(1, 4):
            controller.player_turn("attack")
            controller.opponent_turn()
            assert controller.turn_count == expected

    def test_opponent_self_heal(self, player, opponent, heal_spell, event_manager):
        heal = OpponentDecision(heal_spell, TargetKind.SELF, HealthBand.CRITICAL)
        controller = BattleController(player, opponent, ScriptedPolicy(heal), event_manager)
        opponent.health = 30

        controller.player_turn("attack")
        record = controller.opponent_turn()

        assert opponent.health == 40
        assert player.health == 120
        assert record.target_name == "Bot"
        assert record.message == "Bot healed for 20 HP!"

    def test_player_heal_overflow_restores_player(self, controller, player):
        """The player's heal is checked against the opponent's smaller maximum."""
        player.health = 90

        record = controller.player_turn("heal")

        assert player.health == 120
        assert record.message == "Hero healed for 20 HP!"

    def test_history_in_order(self, controller):
        controller.player_turn("attack")
        controller.opponent_turn()
        controller.player_turn("fire")

        assert [r.side for r in controller.state.history] == [Side.PLAYER, Side.OPPONENT, Side.PLAYER]
        assert controller.state.last_player_turn.spell_id == "fire"


class TestVictory:
    """Test terminal phases."""

    def test_player_victory_skips_opponent(self, controller, opponent, policy):
        opponent.health = 10

        controller.player_turn("attack")

        assert opponent.health == 0
        assert controller.phase == BattlePhase.PLAYER_VICTORY
        assert controller.outcome == BattleOutcome.PLAYER_VICTORY
        assert controller.victor.name == "Hero"
        assert policy.calls == 0

        with pytest.raises(RuntimeError):
            controller.opponent_turn()
        with pytest.raises(RuntimeError):
            controller.player_turn("attack")

    def test_opponent_victory(self, controller, player):
        player.health = 5

        controller.player_turn("attack")
        controller.opponent_turn()

        assert player.health == 0
        assert controller.phase == BattlePhase.OPPONENT_VICTORY
        assert controller.victor.name == "Bot"

    def test_report(self, controller, opponent):
        opponent.health = 10
        controller.player_turn("attack")

        report = controller.report()

        assert isinstance(report, BattleReport)
        assert report.outcome == BattleOutcome.PLAYER_VICTORY
        assert report.victor_name == "Hero"
        assert report.turn_count == 1
        assert report.messages == [("Hero used Attack! Dealt 10 damage to Bot!", None)]


class TestEvents:
    """Test battle events published on the bus."""

    def test_events_for_winning_turn(self, controller, opponent, event_manager):
        received = []
        for event_type in EventType:
            event_manager.subscribe(event_type, received.append)
        opponent.health = 10

        controller.player_turn("attack")

        types = [event.event_type for event in received]
        assert EventType.TURN_STARTED in types
        assert EventType.SPELL_CAST in types
        assert EventType.ACTOR_DEFEATED in types
        assert types[-1] == EventType.BATTLE_ENDED

        ended = received[-1]
        assert ended.victor_name == "Hero"
        assert ended.victor_health == 120

    def test_phase_changes_are_published(self, controller, event_manager):
        phases = []
        event_manager.subscribe(EventType.BATTLE_PHASE_CHANGED, lambda e: phases.append(e.new_phase))

        controller.player_turn("attack")
        controller.opponent_turn()

        assert phases == [
            BattlePhase.RESOLVING_PLAYER_TURN,
            BattlePhase.AWAITING_OPPONENT_CHOICE,
            BattlePhase.RESOLVING_OPPONENT_TURN,
            BattlePhase.AWAITING_PLAYER_CHOICE,
        ]

    def test_opponent_reasoning_is_a_debug_message(self, controller, event_manager, attack_spell):
        received = []
        event_manager.subscribe(EventType.DEBUG_MESSAGE, received.append)
        reasoned = OpponentDecision(attack_spell, TargetKind.OPPONENT, HealthBand.HEALTHY, "Bot is healthy")
        controller.policy = ScriptedPolicy(reasoned)

        controller.player_turn("attack")
        controller.opponent_turn()

        assert len(received) == 1
        assert received[0].message == "Bot is healthy"
        assert received[0].source == "ScriptedPolicy"
        assert received[0].turn == 1

    def test_log_manager_collects_messages(self, player, opponent, policy, event_manager):
        log_manager = LogManager(event_manager)
        controller = BattleController(player, opponent, policy, event_manager, log_manager)

        controller.player_turn("fire")

        texts = [m.text for m in log_manager.get_messages()]
        assert "Hero used Fire! Dealt 15 damage to Bot!" in texts


class TestRun:
    """Test the full blocking battle loop."""

    def test_invalid_choice_is_reprompted(self, controller, opponent):
        opponent.health = 10
        renderer = Mock()
        choices = ScriptedChoiceProvider(["meteor", "Attack"])

        report = controller.run(choices, renderer)

        assert report.outcome == BattleOutcome.PLAYER_VICTORY
        assert report.turn_count == 1
        assert renderer.render_frame.call_count == 1
        renderer.show_invalid_choice.assert_called_once()
        assert renderer.show_invalid_choice.call_args[0][1] == "meteor"
        renderer.show_outcome.assert_called_once()
        assert choices.remaining == 0

    def test_invalid_choice_event(self, controller, opponent, event_manager):
        invalid = []
        event_manager.subscribe(EventType.INVALID_CHOICE, invalid.append)
        opponent.health = 10

        controller.run(ScriptedChoiceProvider(["volt", "attack"]))

        assert [event.raw_input for event in invalid] == ["volt"]

    def test_run_until_opponent_wins(self, controller, player):
        player.health = 25

        report = controller.run(ScriptedChoiceProvider(["attack"] * 10), Mock())

        assert report.outcome == BattleOutcome.OPPONENT_VICTORY
        assert report.victor_name == "Bot"
        assert report.turn_count == 3
        assert len(report.history) == 6

    def test_outcome_context_has_victor(self, controller, opponent):
        opponent.health = 10
        renderer = Mock()

        controller.run(ScriptedChoiceProvider(["attack"]), renderer)

        context = renderer.show_outcome.call_args[0][0]
        assert context.outcome.outcome == BattleOutcome.PLAYER_VICTORY
        assert context.outcome.victor.name == "Hero"

    def test_first_frame_shows_intro(self, controller, opponent):
        opponent.health = 10
        renderer = Mock()

        controller.run(ScriptedChoiceProvider(["attack"]), renderer)

        context = renderer.render_frame.call_args[0][0]
        assert context.show_intro
        assert context.spell_names == ["Attack", "Fire", "Heal"]

    def test_exhausted_input(self, controller):
        with pytest.raises(EOFError):
            controller.run(ScriptedChoiceProvider(["attack", "attack"]))

    def test_cannot_run_twice(self, controller, opponent):
        opponent.health = 10
        controller.run(ScriptedChoiceProvider(["attack"]))

        with pytest.raises(RuntimeError):
            controller.run(ScriptedChoiceProvider(["attack"]))
