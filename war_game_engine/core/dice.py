"""
Random sources for the War game engine.
Every draw (dice, map setup, objective) goes through an injected source,
so a session can run on wall-clock randomness and tests can replay exact rolls.
"""

import random
import time
import logging
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)

DIE_FACES = 6


class RandomSourceExhausted(Exception):
    """Raised when a scripted source runs out of values."""
    pass


class RandomSource(Protocol):
    """Anything that yields the next integer in an inclusive range."""

    def randint(self, low: int, high: int) -> int:
        ...


class SeededRandomSource:
    """Process-wide random source, seeded once from wall-clock time unless a seed is given."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed if seed is not None else time.time_ns()
        self._random = random.Random(self.seed)
        logger.debug(f"Random source seeded with {self.seed}")

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


class ScriptedRandomSource:
    """
    Replays a fixed sequence of values.

    Each value must fall inside the range requested by the caller; a value
    outside it means the script does not match the draws being made.
    """

    def __init__(self, values: Iterable[int]):
        self.values: List[int] = list(values)
        self.position = 0

    @classmethod
    def from_duels(cls, duels: Sequence[Tuple[int, int]]) -> 'ScriptedRandomSource':
        """Build a source from (attacker, defender) dice pairs, in draw order."""
        values = []
        for attacker_roll, defender_roll in duels:
            values.extend([attacker_roll, defender_roll])
        return cls(values)

    @property
    def remaining(self) -> int:
        return len(self.values) - self.position

    def randint(self, low: int, high: int) -> int:
        if self.position >= len(self.values):
            raise RandomSourceExhausted(
                f"Scripted source exhausted after {len(self.values)} draws"
            )
        value = self.values[self.position]
        if not low <= value <= high:
            raise ValueError(
                f"Scripted value {value} at position {self.position} is outside {low}..{high}"
            )
        self.position += 1
        return value


def roll_die(rng: RandomSource) -> int:
    """Roll one six-sided die."""
    return rng.randint(1, DIE_FACES)
