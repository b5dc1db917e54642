"""
Progression module for ranked TicTacToe.
Handles rank tiers, scoring, difficulty adaptation and player records.
"""

from .difficulty import Difficulty
from .config import ProgressionConfig
from .ranks import TierTable, get_level, next_level
from .records import PlayerRecord, RecordStore, InMemoryRecordStore, set_preferred_difficulty
from .policy import GameMode, Outcome, ScoreChange, ProgressionPolicy, apply_outcome
