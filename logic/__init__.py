"""
Logic module for ranked TicTacToe.
Handles game state, rules, and AI opponents.
"""

from .config import LogicConfig
from .game_state import GameState, Player, Move, empty_board, board_from_string, board_to_string
from .move_validator import MoveValidator, ValidationResult
from .win_checker import WinChecker, MatchResult, MatchStatus
from .ai_player import AIPlayer, RandomPlayer, NoMovesAvailableError
