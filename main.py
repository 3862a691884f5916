#!/usr/bin/env python3

import argparse
import sys

from src.core.errors import ConfigurationError
from src.core.events.event_manager import EventManager
from src.core.events.events import LogSaveRequested
from src.core.renderer import RendererConfig
from src.game.ai.opponent_policy import create_opponent_policy
from src.game.battle_controller import BattleController
from src.game.catalog.catalog_loader import ActorCatalog, SpellCatalog
from src.game.config_loader import load_config
from src.game.entities.actor_templates import create_actor, create_player_actor
from src.game.input_handler import ConsoleChoiceProvider
from src.game.managers.log_manager import LogLevel, LogManager
from src.renderers.terminal_renderer import TerminalRenderer


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Spell Duel - turn-based spell combat")
    parser.add_argument("--config", help="Battle config file (default: assets/config/battle.yaml)")
    parser.add_argument("--seed", type=int, help="Seed for the opponent's random choices")
    parser.add_argument("--player", help="Actor id for the player")
    parser.add_argument("--opponent", help="Actor id for the opponent")
    parser.add_argument("--save-log", action="store_true", help="Save the battle log when the battle ends")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    renderer = TerminalRenderer()

    try:
        config = load_config(args.config)
        if args.seed is not None:
            config.seed = args.seed
        if args.player:
            config.player_id = args.player
        if args.opponent:
            config.opponent_id = args.opponent

        event_manager = EventManager(enable_debug_logging=config.log_level == LogLevel.DEBUG)
        log_manager = LogManager(
            event_manager,
            max_messages=config.max_log_messages,
            default_level=config.log_level,
        )
        event_manager.set_debug_callback(log_manager.debug)

        actor_catalog = ActorCatalog.from_file(config.actors_file, event_manager)
        spell_catalog = SpellCatalog.from_file(config.spells_file, event_manager)
        player = create_player_actor(config.player_id, actor_catalog, spell_catalog)
        opponent = create_actor(config.opponent_id, actor_catalog)
        policy = create_opponent_policy(spell_catalog, config.seed)
    except ConfigurationError as e:
        renderer.print_error(f"Error: {e}")
        return 1

    renderer.config = RendererConfig(
        width=config.display_width,
        height=config.display_height,
        title=config.display_title,
    )
    controller = BattleController(player, opponent, policy, event_manager, log_manager)

    renderer.start()
    try:
        controller.run(ConsoleChoiceProvider(event_manager=event_manager), renderer)
    except (KeyboardInterrupt, EOFError):
        print("\n\nBattle interrupted by user")
        return 130
    finally:
        if args.save_log:
            event_manager.publish(LogSaveRequested(turn=controller.turn_count), source="main")
            event_manager.process_events()
        renderer.stop()
        event_manager.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
