"""
Script to play a single-player War game in the terminal.
"""

import logging
import sys
import os
import argparse
from datetime import datetime
from war_game_engine.config import ConfigError, DEFAULT_LOG_FORMAT, load_config
from war_game_engine.core.dice import SeededRandomSource
from war_game_engine.core.game import Game
from war_game_engine.gamemaster.session import GameSession

logger = logging.getLogger(__name__)


def configure_logging(level: str, log_file) -> None:
    """Log to a file; console output is kept for the game itself unless DEBUG is on."""
    handlers = []
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    if level == "DEBUG" or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(
        level=getattr(logging, level),
        format=DEFAULT_LOG_FORMAT,
        handlers=handlers,
        force=True
    )


def make_snapshot_hook(game: Game, snapshot_dir: str):
    """Return a callback that saves a map image after each battle."""
    from war_game_engine.visualization.visualizer import visualize_map

    os.makedirs(snapshot_dir, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    def save_snapshot(outcome):
        number = len(game.battle_log)
        filename = os.path.join(snapshot_dir, f"{stamp}_battle_{number:03d}.png")
        title = f"After battle {number}: {outcome.origin_name} vs {outcome.destination_name}"
        visualize_map(game.game_map, filename, title=title)
        logger.info(f"Map snapshot saved: {filename}")

    return save_snapshot


def main(argv=None):
    """Run an interactive War game."""

    parser = argparse.ArgumentParser(description='Play a single-player War game')
    parser.add_argument('--config', help='YAML configuration file')
    parser.add_argument('--seed', type=int, help='Random seed (default: wall-clock time)')
    parser.add_argument('--faction', help='Army to play (default: Blue)')
    parser.add_argument('--visualize', action='store_true',
                        help='Save a map image after each battle')
    parser.add_argument('--log-level', help='DEBUG, INFO, WARNING, ERROR or CRITICAL')
    args = parser.parse_args(argv)

    try:
        config = load_config(
            args.config,
            seed=args.seed,
            player_faction=args.faction,
            log_level=args.log_level,
            visualize=args.visualize or None,
        )
    except (ConfigError, OSError) as e:
        logging.basicConfig(level=logging.ERROR, format=DEFAULT_LOG_FORMAT)
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        configure_logging(config.log_level, config.log_file)
    except OSError as e:
        logging.basicConfig(level=logging.ERROR, format=DEFAULT_LOG_FORMAT, force=True)
        logger.error(f"Cannot open log file {config.log_file}: {e}")
        return 1

    rng = SeededRandomSource(config.seed)
    logger.info("=" * 60)
    logger.info("WAR GAME")
    logger.info("=" * 60)
    logger.info(f"Seed: {rng.seed}")
    logger.info(f"Player: {config.player_faction.value}")

    try:
        game = Game.new(config, rng)
    except MemoryError:
        print("Error: could not allocate memory for the map!")
        logger.error("Map allocation failed", exc_info=True)
        return 1

    on_battle = make_snapshot_hook(game, config.snapshot_dir) if config.visualize else None
    session = GameSession(game, on_battle=on_battle)

    try:
        result = session.run()
    except KeyboardInterrupt:
        logger.info("Game interrupted by user")
        return 1

    logger.info(f"Session ended: {result.value}")
    logger.info(f"Battles fought: {len(game.battle_log)}")
    logger.info(f"Territories held: {game.controlled_count()}/{len(game.game_map)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
