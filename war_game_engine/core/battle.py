"""
Battle resolution for War game engine.
Validates attack orders and resolves them as a single round of one-die duels.
"""

import logging
from enum import Enum
from typing import List
from dataclasses import dataclass, field

from war_game_engine.core.map import Map, Faction
from war_game_engine.core.dice import RandomSource, roll_die

logger = logging.getLogger(__name__)


class AttackRejection(Enum):
    """Reasons an attack order is refused before any dice are rolled."""
    OUT_OF_RANGE = "out_of_range"
    SAME_TERRITORY = "same_territory"
    NOT_OWNED = "not_owned"
    OWN_TERRITORY = "own_territory"
    INSUFFICIENT_TROOPS = "insufficient_troops"


class AttackValidationError(Exception):
    """Raised when an attack order breaks one of the attack rules."""

    def __init__(self, reason: AttackRejection, message: str):
        super().__init__(message)
        self.reason = reason


@dataclass(frozen=True)
class ValidatedAttack:
    """
    An attack order that passed every rule check.
    Only validate_attack() should build one; the resolver trusts it blindly.
    """
    origin_index: int
    destination_index: int
    attacker_faction: Faction


def validate_attack(
    game_map: Map,
    origin_number: int,
    destination_number: int,
    attacker_faction: Faction
) -> ValidatedAttack:
    """
    Check an attack order typed by the player.

    Args:
        game_map: Current map
        origin_number: 1-based number of the attacking territory
        destination_number: 1-based number of the defending territory
        attacker_faction: Faction of the player giving the order

    Returns:
        ValidatedAttack with 0-based indices

    Raises:
        AttackValidationError: If any rule is broken
    """
    if not (game_map.is_valid_number(origin_number) and game_map.is_valid_number(destination_number)):
        raise AttackValidationError(
            AttackRejection.OUT_OF_RANGE,
            f"Territories must be numbered 1-{len(game_map)}"
        )

    if origin_number == destination_number:
        raise AttackValidationError(
            AttackRejection.SAME_TERRITORY,
            "A territory cannot attack itself"
        )

    origin = game_map.get_by_number(origin_number)
    destination = game_map.get_by_number(destination_number)

    if origin.faction != attacker_faction:
        raise AttackValidationError(
            AttackRejection.NOT_OWNED,
            f"You can only attack from territories held by your army ({attacker_faction.value})"
        )

    if destination.faction == attacker_faction:
        raise AttackValidationError(
            AttackRejection.OWN_TERRITORY,
            "You cannot attack your own territories"
        )

    if origin.troops < 2:
        raise AttackValidationError(
            AttackRejection.INSUFFICIENT_TROOPS,
            "You need at least 2 troops to attack"
        )

    return ValidatedAttack(origin_number - 1, destination_number - 1, attacker_faction)


@dataclass(frozen=True)
class DuelResult:
    """One attacker die against one defender die."""
    number: int
    attacker_roll: int
    defender_roll: int

    @property
    def attacker_won(self) -> bool:
        # Ties go to the defender
        return self.attacker_roll > self.defender_roll

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "attacker_roll": self.attacker_roll,
            "defender_roll": self.defender_roll,
            "winner": "attacker" if self.attacker_won else "defender",
        }


@dataclass
class BattleOutcome:
    """Result of resolving one attack."""
    origin_name: str
    destination_name: str
    attacker_faction: Faction
    defender_faction: Faction
    origin_troops_before: int
    destination_troops_before: int
    attacker_dice_count: int
    defender_dice_count: int
    duels: List[DuelResult] = field(default_factory=list)
    attacker_wins: int = 0
    defender_wins: int = 0
    conquered: bool = False
    troop_transferred: bool = False
    origin_troops_after: int = 0
    destination_troops_after: int = 0

    @property
    def duel_count(self) -> int:
        return len(self.duels)

    @property
    def verdict(self) -> str:
        """Which side won more duels: 'attacker', 'defender' or 'draw'."""
        if self.attacker_wins > self.defender_wins:
            return "attacker"
        if self.defender_wins > self.attacker_wins:
            return "defender"
        return "draw"

    def to_dict(self) -> dict:
        return {
            "origin": self.origin_name,
            "destination": self.destination_name,
            "attacker_faction": self.attacker_faction.value,
            "defender_faction": self.defender_faction.value,
            "origin_troops_before": self.origin_troops_before,
            "destination_troops_before": self.destination_troops_before,
            "duels": [d.to_dict() for d in self.duels],
            "attacker_wins": self.attacker_wins,
            "defender_wins": self.defender_wins,
            "verdict": self.verdict,
            "conquered": self.conquered,
            "troop_transferred": self.troop_transferred,
            "origin_troops_after": self.origin_troops_after,
            "destination_troops_after": self.destination_troops_after,
        }


class BattleResolver:
    """Resolves a single validated attack against the map."""

    def __init__(self, game_map: Map, attack: ValidatedAttack, dice: RandomSource):
        self.game_map = game_map
        self.attack = attack
        self.dice = dice
        self.origin = game_map.get(attack.origin_index)
        self.destination = game_map.get(attack.destination_index)

    def resolve(self) -> BattleOutcome:
        """
        Run the battle and mutate the two territories.

        One troop always stays home, so the attacker rolls troops - 1 dice and
        the defender rolls one die per troop. Only min(attacker, defender)
        duels are fought; extra dice on either side are not rolled.
        """
        outcome = BattleOutcome(
            origin_name=self.origin.name,
            destination_name=self.destination.name,
            attacker_faction=self.origin.faction,
            defender_faction=self.destination.faction,
            origin_troops_before=self.origin.troops,
            destination_troops_before=self.destination.troops,
            attacker_dice_count=self.origin.troops - 1,
            defender_dice_count=self.destination.troops,
        )

        # Step 1: Roll the duels
        self._roll_duels(outcome)

        # Step 2: Remove losses on both sides
        self._apply_losses(outcome)

        # Step 3: Hand the destination over if it was wiped out
        self._check_conquest(outcome)

        outcome.origin_troops_after = self.origin.troops
        outcome.destination_troops_after = self.destination.troops

        logger.info(
            f"Battle {outcome.origin_name} -> {outcome.destination_name}: "
            f"{outcome.attacker_wins}-{outcome.defender_wins} in {outcome.duel_count} duels, "
            f"conquered={outcome.conquered}, final {outcome.origin_troops_after}/{outcome.destination_troops_after}"
        )
        return outcome

    def _roll_duels(self, outcome: BattleOutcome) -> None:
        duel_count = min(outcome.attacker_dice_count, outcome.defender_dice_count)
        for number in range(1, duel_count + 1):
            attacker_roll = roll_die(self.dice)
            defender_roll = roll_die(self.dice)
            duel = DuelResult(number, attacker_roll, defender_roll)
            outcome.duels.append(duel)
            if duel.attacker_won:
                outcome.attacker_wins += 1
            else:
                outcome.defender_wins += 1
            logger.debug(f"Duel {number}: attacker {attacker_roll} vs defender {defender_roll}")

    def _apply_losses(self, outcome: BattleOutcome) -> None:
        # The origin is not floored here: enough defender wins can take it
        # to 0 or below while it keeps its owner.
        self.destination.troops -= outcome.attacker_wins
        self.origin.troops -= outcome.defender_wins

    def _check_conquest(self, outcome: BattleOutcome) -> None:
        if self.destination.troops > 0:
            return

        outcome.conquered = True
        self.destination.faction = self.origin.faction
        self.destination.troops = 1
        logger.info(f"{self.destination.name} now belongs to {self.origin.faction.value}")

        if self.origin.troops > 1:
            self.origin.troops -= 1
            self.destination.troops += 1
            outcome.troop_transferred = True


def resolve_attack(game_map: Map, attack: ValidatedAttack, dice: RandomSource) -> BattleOutcome:
    """
    Resolve an attack.

    Args:
        game_map: Map to mutate
        attack: Order produced by validate_attack()
        dice: Random source for the six-sided dice

    Returns:
        BattleOutcome describing every duel and the final troop counts
    """
    resolver = BattleResolver(game_map, attack, dice)
    return resolver.resolve()
