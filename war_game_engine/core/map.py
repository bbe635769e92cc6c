"""
Map module for War game engine.
Defines factions, territories, and the standard 42-territory world map.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Set, Tuple


class Faction(Enum):
    """The six armies that can hold territory."""
    BLUE = "Blue"
    RED = "Red"
    GREEN = "Green"
    YELLOW = "Yellow"
    PINK = "Pink"
    PURPLE = "Purple"

    @staticmethod
    def parse(value: str) -> 'Faction':
        """Look up a faction by its value or member name, case-insensitive."""
        text = value.strip().lower()
        for faction in Faction:
            if text in (faction.value.lower(), faction.name.lower()):
                return faction
        raise ValueError(f"Unknown faction: {value!r}")


# Ordered as presented to the player (ID 1..42)
STANDARD_TERRITORY_NAMES = [
    "Alaska", "Alberta", "Central America", "South America", "Argentina", "Brazil",
    "Greenland", "Mackenzie", "New York", "Ontario", "Quebec", "Northwest Territory",
    "Venezuela", "South Africa", "Congo", "Egypt", "Madagascar", "North Africa",
    "East Africa", "Afghanistan", "China", "India", "Irkutsk", "Japan",
    "Kamchatka", "Mongolia", "Middle East", "Siberia", "Southeast Asia", "Siam",
    "Ural", "Yakutsk", "Eastern Australia", "Indonesia", "New Guinea", "Western Australia",
    "Western Europe", "Eastern Europe", "Great Britain", "Iceland", "Scandinavia", "Ukraine",
]

NUM_TERRITORIES = len(STANDARD_TERRITORY_NAMES)


@dataclass
class Territory:
    """A single region on the map, held by one faction with a troop count."""
    name: str
    faction: Faction
    troops: int

    def __post_init__(self):
        """Validate territory configuration."""
        if not isinstance(self.faction, Faction):
            raise ValueError(f"{self.name}: faction must be a Faction, got {self.faction!r}")
        if self.troops < 1:
            raise ValueError(f"{self.name}: a territory starts with at least 1 troop, got {self.troops}")

    def is_held_by(self, faction: Faction) -> bool:
        return self.faction == faction

    def to_dict(self) -> dict:
        """Convert territory to dictionary for logging and rendering."""
        return {
            "name": self.name,
            "faction": self.faction.value,
            "troops": self.troops,
        }

    def __repr__(self) -> str:
        return f"Territory({self.name}, {self.faction.value}, {self.troops})"


class Map:
    """
    The ordered, fixed-size collection of territories.

    Indices are 0-based internally; numbers shown to the player are 1-based.
    There is no adjacency: any territory may attack any other.
    """

    def __init__(self, territories: Iterable[Territory]):
        self.territories: List[Territory] = list(territories)
        if not self.territories:
            raise ValueError("A map needs at least one territory")

    @classmethod
    def from_entries(cls, entries: Iterable[Tuple[str, Faction, int]]) -> 'Map':
        """Build a map from explicit (name, faction, troops) triples."""
        return cls(Territory(name, faction, troops) for name, faction, troops in entries)

    def __len__(self) -> int:
        return len(self.territories)

    def __iter__(self) -> Iterator[Territory]:
        return iter(self.territories)

    def get(self, index: int) -> Territory:
        """Get a territory by its 0-based index."""
        if not 0 <= index < len(self.territories):
            raise IndexError(f"Territory index {index} out of range 0..{len(self.territories) - 1}")
        return self.territories[index]

    def get_by_number(self, number: int) -> Territory:
        """Get a territory by the 1-based number shown to the player."""
        return self.get(number - 1)

    def is_valid_number(self, number: int) -> bool:
        return 1 <= number <= len(self.territories)

    def find(self, name: str) -> Optional[Territory]:
        """Find a territory by name (case-insensitive)."""
        wanted = name.strip().lower()
        for territory in self.territories:
            if territory.name.lower() == wanted:
                return territory
        return None

    def count_controlled(self, faction: Faction) -> int:
        """Get the number of territories held by a faction."""
        return sum(1 for t in self.territories if t.faction == faction)

    def has_faction(self, faction: Faction) -> bool:
        """Check whether a faction still holds any territory."""
        return any(t.faction == faction for t in self.territories)

    def factions_present(self) -> Set[Faction]:
        return {t.faction for t in self.territories}

    def to_dict(self) -> dict:
        return {"territories": [t.to_dict() for t in self.territories]}

    def __repr__(self) -> str:
        return f"Map({len(self.territories)} territories)"


def create_standard_map(rng, min_troops: int = 1, max_troops: int = 5) -> Map:
    """
    Create the standard 42-territory map with randomized owners and troops.

    Args:
        rng: Random source with a randint(low, high) method
        min_troops: Lowest initial troop count (inclusive)
        max_troops: Highest initial troop count (inclusive)
    """
    if min_troops < 1 or max_troops < min_troops:
        raise ValueError(f"Invalid initial troop range {min_troops}..{max_troops}")

    factions = list(Faction)
    territories = []
    for name in STANDARD_TERRITORY_NAMES:
        faction = factions[rng.randint(0, len(factions) - 1)]
        troops = rng.randint(min_troops, max_troops)
        territories.append(Territory(name, faction, troops))

    return Map(territories)
