"""
Player records and the record store capability.

The store is injected into the match session; where and how the records
are persisted is up to the application. InMemoryRecordStore keeps them
in a dict keyed by player name.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from dataclasses import dataclass, replace

from .difficulty import Difficulty

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerRecord:
    """
    A player's persistent progression.

    losses_count / draws_count are the current streak counters used for
    difficulty downgrades; wins / losses / draws are lifetime totals.
    """
    name: str
    score: int = 0
    preferred_difficulty: Difficulty = Difficulty.EASY
    losses_count: int = 0
    draws_count: int = 0
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "score": self.score,
            "preferredDifficulty": self.preferred_difficulty.value,
            "lossesCount": self.losses_count,
            "drawsCount": self.draws_count,
            "gamesPlayed": self.games_played,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerRecord":
        """Build a record from stored data; missing counters default to 0."""
        return cls(
            name=data["name"],
            score=max(0, int(data.get("score", 0))),
            preferred_difficulty=Difficulty.from_label(data.get("preferredDifficulty") or "Easy"),
            losses_count=int(data.get("lossesCount", 0)),
            draws_count=int(data.get("drawsCount", 0)),
            games_played=int(data.get("gamesPlayed", 0)),
            wins=int(data.get("wins", 0)),
            losses=int(data.get("losses", 0)),
            draws=int(data.get("draws", 0)),
        )


class RecordStore(ABC):
    """
    Get/set player records by name.
    """

    @abstractmethod
    def get(self, name: str) -> Optional[PlayerRecord]:
        """The stored record, or None if the player is unknown."""

    @abstractmethod
    def save(self, record: PlayerRecord) -> None:
        """Store (create or replace) a record."""

    @abstractmethod
    def names(self) -> List[str]:
        """Names of all known players."""

    def get_or_create(self, name: str) -> PlayerRecord:
        """
        Load a player, creating a fresh profile on first appearance.
        """
        record = self.get(name)
        if record is None:
            record = PlayerRecord(name=name)
            self.save(record)
            logger.info(f"Created new player profile: {name}")
        return record


class InMemoryRecordStore(RecordStore):
    """Record store backed by a dict."""

    def __init__(self, records: Optional[Dict[str, PlayerRecord]] = None):
        self._records: Dict[str, PlayerRecord] = dict(records or {})

    def get(self, name: str) -> Optional[PlayerRecord]:
        return self._records.get(name)

    def save(self, record: PlayerRecord) -> None:
        self._records[record.name] = record

    def names(self) -> List[str]:
        return sorted(self._records)


def set_preferred_difficulty(store: RecordStore, name: str, difficulty: Difficulty) -> PlayerRecord:
    """
    Manually choose a player's AI difficulty.

    This is the only way a difficulty is ever raised; the progression
    policy only demotes.
    """
    record = replace(store.get_or_create(name), preferred_difficulty=difficulty)
    store.save(record)
    logger.info(f"{name} chose difficulty {difficulty.value}")
    return record
