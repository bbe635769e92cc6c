"""
Secret objectives for War game engine.
Each objective is a predicate over the map, drawn once per game.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Tuple

from war_game_engine.core.map import Map, Faction

logger = logging.getLogger(__name__)


class Objective(ABC):
    """Base class for all objectives."""

    objective_id: int = 0

    @abstractmethod
    def is_met(self, game_map: Map, player_faction: Faction) -> bool:
        """Check whether the objective holds on the given map."""
        pass

    @abstractmethod
    def describe(self) -> Tuple[str, str]:
        """Return (mission title, goal line) shown to the player."""
        pass

    @abstractmethod
    def to_dict(self) -> dict:
        pass


@dataclass(frozen=True)
class EliminateFaction(Objective):
    """Wipe a faction off the map."""
    target: Faction
    objective_id: int = field(default=0, compare=False)

    def is_met(self, game_map: Map, player_faction: Faction) -> bool:
        for territory in game_map:
            if territory.faction == self.target:
                return False
        return True

    def describe(self) -> Tuple[str, str]:
        name = self.target.value
        return (
            f"Destroy the {name.upper()} army",
            f"Eliminate every {name.lower()} territory from the map",
        )

    def to_dict(self) -> dict:
        return {"type": "eliminate_faction", "target": self.target.value}


@dataclass(frozen=True)
class ControlAtLeast(Objective):
    """Hold at least `count` territories."""
    count: int
    objective_id: int = field(default=0, compare=False)

    def __post_init__(self):
        if self.count < 1:
            raise ValueError(f"ControlAtLeast needs a positive count, got {self.count}")

    def is_met(self, game_map: Map, player_faction: Faction) -> bool:
        controlled = 0
        for territory in game_map:
            if territory.faction == player_faction:
                controlled += 1
                if controlled >= self.count:
                    return True
        return False

    def describe(self) -> Tuple[str, str]:
        return (
            f"Conquer {self.count} territories",
            f"Control at least {self.count} territories with your army",
        )

    def to_dict(self) -> dict:
        return {"type": "control_at_least", "count": self.count}


OBJECTIVE_TABLE: Dict[int, Objective] = {
    1: EliminateFaction(Faction.RED, objective_id=1),
    2: EliminateFaction(Faction.GREEN, objective_id=2),
    3: ControlAtLeast(18, objective_id=3),
    4: ControlAtLeast(24, objective_id=4),
}

# Used for any identifier outside the table
DEFAULT_OBJECTIVE: Objective = ControlAtLeast(15)

NUM_OBJECTIVES = len(OBJECTIVE_TABLE)

# Factions some objective orders the player to wipe out; they cannot be played
TARGET_FACTIONS = frozenset(
    o.target for o in OBJECTIVE_TABLE.values() if isinstance(o, EliminateFaction)
)


def objective_from_id(objective_id: int) -> Objective:
    """Map an objective identifier to its objective, falling back to ControlAtLeast(15)."""
    return OBJECTIVE_TABLE.get(objective_id, DEFAULT_OBJECTIVE)


def draw_objective(rng) -> Objective:
    """Draw one of the objectives uniformly at random."""
    objective_id = rng.randint(1, NUM_OBJECTIVES)
    objective = objective_from_id(objective_id)
    logger.debug(f"Drew objective {objective_id}: {objective.to_dict()}")
    return objective


def is_objective_met(game_map: Map, objective: Objective, player_faction: Faction) -> bool:
    """
    Check whether the player's objective is satisfied.

    Args:
        game_map: Current map (not modified)
        objective: The player's objective
        player_faction: The player's faction

    Returns:
        True if the objective holds right now
    """
    return objective.is_met(game_map, player_faction)
