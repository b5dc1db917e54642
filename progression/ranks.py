"""
Rank / level resolver.
Maps a cumulative score to a named tier via an ordered threshold table.
"""

from typing import Generic, List, Optional, Sequence, Tuple, TypeVar

from .config import ProgressionConfig
from .difficulty import Difficulty

T = TypeVar("T")


class TierTable(Generic[T]):
    """
    Ordered (value, minimum score) table, highest threshold first.

    The first entry whose threshold is <= score wins. The last entry
    must have threshold 0 so every score resolves.
    """

    def __init__(self, tiers: Sequence[Tuple[T, int]]):
        if not tiers:
            raise ValueError("Tier table must not be empty")

        thresholds = [threshold for _, threshold in tiers]
        for higher, lower in zip(thresholds, thresholds[1:]):
            if higher <= lower:
                raise ValueError(
                    f"Tier thresholds must be strictly descending, got {higher} then {lower}"
                )
        if thresholds[-1] != 0:
            raise ValueError("Last tier must be a 0 threshold catch-all")

        self.tiers: List[Tuple[T, int]] = list(tiers)

    def lookup(self, score: int) -> T:
        """Value of the highest tier whose threshold is <= score."""
        score = max(0, score)
        for value, threshold in self.tiers:
            if score >= threshold:
                return value
        return self.tiers[-1][0]

    def next_tier(self, score: int) -> Optional[Tuple[T, int]]:
        """
        The tier directly above the one score resolves to.

        Returns:
            (value, threshold) of the next tier, or None at the top.
        """
        score = max(0, score)
        next_up = None
        for value, threshold in self.tiers:
            if score >= threshold:
                return next_up
            next_up = (value, threshold)
        return next_up


def get_level(score: int, config: Optional[ProgressionConfig] = None) -> Difficulty:
    """
    Returns the rank tier for a cumulative score.

    Args:
        score: Cumulative score. Exactly hitting a threshold reaches that tier.
        config: Progression config holding LEVEL_THRESHOLDS.
    """
    config = config or ProgressionConfig()
    return TierTable(config.LEVEL_THRESHOLDS).lookup(score)


def next_level(score: int, config: Optional[ProgressionConfig] = None) -> Optional[Tuple[Difficulty, int]]:
    """
    Next rank above the current one and the points still needed.

    Returns:
        (tier, points_needed), or None if score is already in the top tier.
    """
    config = config or ProgressionConfig()
    upcoming = TierTable(config.LEVEL_THRESHOLDS).next_tier(score)
    if upcoming is None:
        return None

    tier, threshold = upcoming
    return tier, threshold - max(0, score)
