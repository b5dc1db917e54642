"""
Progression policy.

Turns a finished match into a score change, streak counter updates and,
in single player, an automatic difficulty demotion for struggling players.
Pure: records go in, new records come out; nothing is stored here.
"""

import logging
from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass, replace

from .config import ProgressionConfig
from .difficulty import Difficulty
from .ranks import TierTable, get_level
from .records import PlayerRecord

logger = logging.getLogger(__name__)


class GameMode(Enum):
    """Who is playing."""
    SINGLE_PLAYER = "Single Player"   # human vs AI
    TWO_PLAYER = "Two Player"         # local human vs human


class Outcome(Enum):
    """Result of a completed match for one participant."""
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


@dataclass(frozen=True)
class ScoreChange:
    """What a single outcome did to one player's record."""
    name: str
    outcome: Outcome
    old_score: int
    new_score: int
    old_difficulty: Difficulty
    new_difficulty: Difficulty

    @property
    def points(self) -> int:
        """Applied delta, after flooring at 0."""
        return self.new_score - self.old_score

    @property
    def demoted(self) -> bool:
        return self.new_difficulty != self.old_difficulty

    def describe(self) -> str:
        text = f"{self.name}: {self.points:+d} points ({self.old_score} -> {self.new_score})"
        if self.demoted:
            text += f", difficulty {self.old_difficulty.value} -> {self.new_difficulty.value}"
        return text


class ProgressionPolicy:
    """
    Applies match outcomes to player records.

    Single player:
    - Win: bonus looked up by current score; both streak counters reset
    - Loss: penalty by score-derived tier; loss streak +1; downgrade check
    - Draw: flat bonus; draw streak +1; downgrade check

    Two player: flat win bonus to the winner only, flat draw bonus to
    both; no streaks, no difficulty changes.
    """

    def __init__(self, config: Optional[ProgressionConfig] = None):
        self.config = config or ProgressionConfig()
        self.win_bonuses = TierTable(self.config.WIN_BONUS_THRESHOLDS)

    def win_bonus(self, score: int) -> int:
        """Points for beating the AI at the given current score."""
        return max(0, self.win_bonuses.lookup(score))

    def loss_penalty(self, score: int) -> int:
        """Points (<= 0) lost to the AI at the given current score."""
        level = get_level(score, self.config)
        return self.config.LOSS_PENALTIES.get(level, self.config.DEFAULT_LOSS_PENALTY)

    def evaluate_downgrade(self, losses_count: int, draws_count: int,
                           current: Difficulty) -> Difficulty:
        """
        Difficulty after a loss or draw. Never promotes.

        Args:
            losses_count: Updated consecutive-loss counter.
            draws_count: Updated consecutive-draw counter.
            current: The player's current difficulty preference.
        """
        struggling = losses_count + draws_count

        if losses_count >= self.config.LOSS_STREAK_RESET:
            return Difficulty.lowest()
        if struggling >= self.config.STRUGGLE_RESET:
            return Difficulty.lowest()
        if struggling >= self.config.STRUGGLE_DEMOTE and current != Difficulty.lowest():
            return Difficulty.AVERAGE
        return current

    def apply(self, outcome: Outcome, mode: GameMode, record: PlayerRecord) -> PlayerRecord:
        """
        Apply one match outcome to one player's record.

        Returns:
            The updated record. The input record is left unchanged.
        """
        score = max(0, record.score)
        totals = self._count_game(record, outcome)

        if mode == GameMode.TWO_PLAYER:
            if outcome == Outcome.WIN:
                score += self.config.TWO_PLAYER_WIN_BONUS
            elif outcome == Outcome.DRAW:
                score += self.config.TWO_PLAYER_DRAW_BONUS
            return replace(totals, score=max(0, score))

        if outcome == Outcome.WIN:
            return replace(
                totals,
                score=score + self.win_bonus(score),
                losses_count=0,
                draws_count=0,
            )

        losses_count = record.losses_count
        draws_count = record.draws_count
        if outcome == Outcome.LOSS:
            score = max(0, score + self.loss_penalty(score))
            losses_count += 1
        else:
            score += self.config.DRAW_BONUS
            draws_count += 1

        difficulty = self.evaluate_downgrade(
            losses_count, draws_count, record.preferred_difficulty
        )
        if difficulty != record.preferred_difficulty:
            logger.info(
                f"{record.name} is struggling ({losses_count} losses, {draws_count} draws): "
                f"difficulty {record.preferred_difficulty.value} -> {difficulty.value}"
            )

        return replace(
            totals,
            score=score,
            losses_count=losses_count,
            draws_count=draws_count,
            preferred_difficulty=difficulty,
        )

    def apply_with_change(self, outcome: Outcome, mode: GameMode,
                          record: PlayerRecord) -> Tuple[PlayerRecord, ScoreChange]:
        """Same as apply(), also returning a ScoreChange summary."""
        updated = self.apply(outcome, mode, record)
        change = ScoreChange(
            name=record.name,
            outcome=outcome,
            old_score=max(0, record.score),
            new_score=updated.score,
            old_difficulty=record.preferred_difficulty,
            new_difficulty=updated.preferred_difficulty,
        )
        return updated, change

    def _count_game(self, record: PlayerRecord, outcome: Outcome) -> PlayerRecord:
        """Bump the lifetime totals."""
        return replace(
            record,
            games_played=record.games_played + 1,
            wins=record.wins + int(outcome == Outcome.WIN),
            losses=record.losses + int(outcome == Outcome.LOSS),
            draws=record.draws + int(outcome == Outcome.DRAW),
        )


def apply_outcome(outcome: Outcome, mode: GameMode, record: PlayerRecord,
                  config: Optional[ProgressionConfig] = None) -> PlayerRecord:
    """Functional shortcut for ProgressionPolicy(config).apply(...)."""
    return ProgressionPolicy(config).apply(outcome, mode, record)
