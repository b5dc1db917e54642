"""
Match module for ranked TicTacToe.
Drives a single match and hands finished games to the progression policy.
"""

from .config import MatchConfig
from .session import MatchSession, create_ai_player
