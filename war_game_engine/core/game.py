"""
Game manager for War game engine.
Owns the map and the player for one session and routes attacks and victory checks.
"""

import logging
from typing import List, Optional
from dataclasses import dataclass

from war_game_engine.core.map import Map, Faction, create_standard_map
from war_game_engine.core.dice import RandomSource
from war_game_engine.core.battle import BattleOutcome, validate_attack, resolve_attack
from war_game_engine.core.objectives import ControlAtLeast, Objective, draw_objective, is_objective_met

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Player:
    """The human player: a fixed faction and a secret objective."""
    faction: Faction
    objective: Objective


class Game:
    """Main game controller for a single-player War session."""

    def __init__(self, game_map: Map, player: Player, dice: RandomSource):
        """
        Initialize a game.

        Args:
            game_map: The map, owned by this game for the whole session
            player: The human player
            dice: Random source used for battle dice
        """
        self.game_map = game_map
        self.player = player
        self.dice = dice
        self.battle_log: List[BattleOutcome] = []
        self.winner: Optional[Faction] = None

    @classmethod
    def new(cls, config, rng: RandomSource) -> 'Game':
        """
        Set up a fresh game: build the map, then draw the objective.

        Args:
            config: GameConfig with player faction and map setup
            rng: Random source shared by setup, objective draw and dice
        """
        if config.territories:
            game_map = Map.from_entries(config.territories)
        else:
            game_map = create_standard_map(rng, config.min_troops, config.max_troops)

        objective = draw_objective(rng)
        player = Player(config.player_faction, objective)

        if isinstance(objective, ControlAtLeast) and objective.count > len(game_map):
            logger.warning(
                f"Objective cannot be reached: {objective.count} territories needed, "
                f"map has {len(game_map)}"
            )

        logger.info(f"New game: {len(game_map)} territories, player {player.faction.value}")
        logger.debug(f"Objective: {objective.to_dict()}")
        return cls(game_map, player, rng)

    def attack(self, origin_number: int, destination_number: int) -> BattleOutcome:
        """
        Attack from one territory to another.

        Args:
            origin_number: 1-based number of the attacking territory
            destination_number: 1-based number of the target territory

        Returns:
            BattleOutcome of the resolved battle

        Raises:
            AttackValidationError: If the order breaks an attack rule
        """
        attack = validate_attack(self.game_map, origin_number, destination_number, self.player.faction)
        outcome = resolve_attack(self.game_map, attack, self.dice)
        self.battle_log.append(outcome)
        return outcome

    def check_victory(self) -> bool:
        """Check the player's objective; records the winner once it is met."""
        met = is_objective_met(self.game_map, self.player.objective, self.player.faction)
        if met and self.winner is None:
            self.winner = self.player.faction
            logger.info(f"VICTORY: {self.player.faction.value} completed {self.player.objective.to_dict()}")
        return met

    def controlled_count(self) -> int:
        return self.game_map.count_controlled(self.player.faction)
