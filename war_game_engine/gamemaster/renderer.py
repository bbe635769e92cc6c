"""
Text rendering for the War session.
Builds the map table, objective card, menu and battle report shown to the player.
"""

from typing import List

from war_game_engine.core.map import Map
from war_game_engine.core.battle import BattleOutcome
from war_game_engine.core.objectives import Objective


class Renderer:
    """Formats game state as plain text."""

    @staticmethod
    def render_map(game_map: Map) -> str:
        """Render every territory as a table row, numbered from 1."""
        lines = [
            "",
            "=== WORLD MAP ===",
            f"{'ID':<3} | {'Territory':<25} | {'Army':<10} | Troops",
            "----|---------------------------|------------|--------",
        ]
        for number, territory in enumerate(game_map, start=1):
            lines.append(
                f"{number:<3} | {territory.name:<25} | {territory.faction.value:<10} | {territory.troops}"
            )
        lines.append("=" * 31)
        return "\n".join(lines)

    @staticmethod
    def render_objective(objective: Objective) -> str:
        title, goal = objective.describe()
        return "\n".join([
            "",
            "=== YOUR SECRET MISSION ===",
            f"*** MISSION: {title} ***",
            f"   Goal: {goal}",
            "=" * 26,
        ])

    @staticmethod
    def render_menu() -> str:
        return "\n".join([
            "",
            "=== MAIN MENU ===",
            "1. Attack a territory",
            "2. Check victory",
            "0. Quit game",
            "=" * 17,
        ])

    @staticmethod
    def render_battle(outcome: BattleOutcome) -> str:
        """
        Render a battle report: the matchup, each duel, the tally and the final state.
        """
        lines: List[str] = [
            "",
            f"*** BATTLE: {outcome.origin_name} vs {outcome.destination_name} ***",
            f"Attacking army: {outcome.attacker_faction.value} ({outcome.origin_troops_before} troops)",
            f"Defending army: {outcome.defender_faction.value} ({outcome.destination_troops_before} troops)",
            "",
            "*** Rolling dice... ***",
            f"Attacking troops: {outcome.attacker_dice_count} | Defending troops: {outcome.defender_dice_count}",
            "-" * 40,
        ]

        for duel in outcome.duels:
            winner = "ATTACKER WINS! (+1)" if duel.attacker_won else "DEFENDER WINS! (+1)"
            lines.append(
                f"Duel {duel.number}: Attacker rolls {duel.attacker_roll} | "
                f"Defender rolls {duel.defender_roll} -> {winner}"
            )

        lines.append("-" * 40)
        lines.extend([
            "",
            "*** BATTLE RESULT: ***",
            f"Attacker wins: {outcome.attacker_wins}",
            f"Defender wins: {outcome.defender_wins}",
        ])

        verdict = {
            "attacker": "*** RESULT: ATTACKER WON! ***",
            "defender": "*** RESULT: DEFENDER WON! ***",
            "draw": "*** RESULT: DRAW! ***",
        }[outcome.verdict]
        lines.append(verdict)

        if outcome.conquered:
            lines.extend([
                "",
                "*** TERRITORY CONQUERED! ***",
                f"{outcome.destination_name} now belongs to the {outcome.attacker_faction.value} army!",
            ])
            final_destination_faction = outcome.attacker_faction
        else:
            lines.extend(["", "*** Territory successfully defended! ***"])
            final_destination_faction = outcome.defender_faction

        lines.extend([
            "",
            "Final state:",
            f"{outcome.origin_name}: {outcome.origin_troops_after} troops ({outcome.attacker_faction.value})",
            f"{outcome.destination_name}: {outcome.destination_troops_after} troops ({final_destination_faction.value})",
        ])
        return "\n".join(lines)
