"""
Turn-taking driver for a single-player War session.
Shows the map, reads the player's choice and dispatches to the game.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from war_game_engine.core.game import Game
from war_game_engine.core.battle import AttackValidationError, BattleOutcome
from war_game_engine.gamemaster.renderer import Renderer

logger = logging.getLogger(__name__)


class MenuOption(Enum):
    """Actions offered by the main menu."""
    QUIT = 0
    ATTACK = 1
    CHECK_VICTORY = 2


class SessionResult(Enum):
    """How a session ended."""
    VICTORY = "victory"
    QUIT = "quit"
    END_OF_INPUT = "end_of_input"


class GameSession:
    """Runs the menu loop until the player quits, wins, or input runs out."""

    def __init__(
        self,
        game: Game,
        input_func: Optional[Callable[[str], str]] = None,
        output_func: Optional[Callable[[str], None]] = None,
        on_battle: Optional[Callable[[BattleOutcome], None]] = None
    ):
        self.game = game
        self.input_func = input_func or input
        self.output_func = output_func or print
        self.on_battle = on_battle
        self.turns = 0

    def run(self) -> SessionResult:
        """Run the session loop."""
        self._show_welcome()

        try:
            while True:
                self.turns += 1
                self.output_func(Renderer.render_map(self.game.game_map))
                self.output_func(Renderer.render_objective(self.game.player.objective))
                self.output_func(Renderer.render_menu())

                option = self._read_option()

                if option == MenuOption.QUIT:
                    self.output_func("\nThanks for playing! See you next time!")
                    logger.info(f"Player quit after {self.turns} turns")
                    return SessionResult.QUIT

                if option == MenuOption.ATTACK:
                    self.attack_phase()
                elif option == MenuOption.CHECK_VICTORY:
                    if self.check_victory():
                        logger.info(f"Session won after {self.turns} turns")
                        return SessionResult.VICTORY
                else:
                    self.output_func("\nInvalid option! Try again.")

                self.input_func("\nPress Enter to continue...")
        except EOFError:
            logger.info("Input closed, ending session")
            return SessionResult.END_OF_INPUT

    def attack_phase(self) -> Optional[BattleOutcome]:
        """Ask for origin and destination, then resolve the attack if the order is valid."""
        size = len(self.game.game_map)
        self.output_func("\n=== ATTACK PHASE ===")
        origin = self._read_int(f"Choose the origin territory (1-{size}): ")
        destination = self._read_int(f"Choose the destination territory (1-{size}): ")

        if origin is None or destination is None:
            self.output_func("*** Invalid territories! Try again. ***")
            return None

        try:
            outcome = self.game.attack(origin, destination)
        except AttackValidationError as e:
            logger.debug(f"Attack {origin} -> {destination} rejected: {e.reason.value}")
            self.output_func(f"*** {e}! ***")
            return None

        self.output_func(Renderer.render_battle(outcome))
        if self.on_battle is not None:
            self.on_battle(outcome)
        return outcome

    def check_victory(self) -> bool:
        if self.game.check_victory():
            self.output_func("\n*** CONGRATULATIONS! You completed your mission and won the game! ***")
            return True
        self.output_func("\n*** You have not completed your mission yet. Keep trying! ***")
        return False

    def _show_welcome(self) -> None:
        self.output_func("=== WELCOME TO WAR ===")
        self.output_func(f"You are playing the {self.game.player.faction.value} army!")
        self.output_func("Your secret mission has been drawn...\n")

    def _read_option(self) -> Optional[MenuOption]:
        value = self._read_int("Choose an option: ")
        if value is None:
            return None
        try:
            return MenuOption(value)
        except ValueError:
            return None

    def _read_int(self, prompt: str) -> Optional[int]:
        raw = self.input_func(prompt)
        try:
            return int(raw.strip())
        except ValueError:
            return None
