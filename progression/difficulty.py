"""
Difficulty / rank tiers, ordered from lowest to highest.
"""

from enum import Enum
from functools import total_ordering


@total_ordering
class Difficulty(Enum):
    """
    Named progression tiers.

    Declaration order is the tier order: EASY is the lowest tier,
    AVERAGE the second lowest, DEMIGOD the highest.
    """
    EASY = "Easy"
    AVERAGE = "Average"
    ADVANCED = "Advanced"
    SUPERSTAR = "Superstar"
    ELITE = "Elite"
    STRATEGIST = "Strategist"
    GRANDMASTER = "Grandmaster"
    WARLORD = "Warlord"
    TITAN = "Titan"
    LEGEND = "Legend"
    IMMORTAL = "Immortal"
    ASCENDANT = "Ascendant"
    DEMIGOD = "Demigod"

    @property
    def rank(self) -> int:
        """Position in the tier order (EASY == 0)."""
        return list(Difficulty).index(self)

    @classmethod
    def lowest(cls) -> "Difficulty":
        return cls.EASY

    @classmethod
    def from_label(cls, label: str) -> "Difficulty":
        """Look up a tier by its display label, case-insensitive."""
        for tier in cls:
            if tier.value.lower() == label.strip().lower():
                return tier
        raise ValueError(f"Unknown difficulty: {label!r}")

    def __lt__(self, other):
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank < other.rank

    def __str__(self) -> str:
        return self.value
