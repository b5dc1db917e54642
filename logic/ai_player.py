"""
AI players for ranked TicTacToe.

RandomPlayer picks any empty cell (lowest difficulty tier).
AIPlayer uses an exhaustive Minimax search to choose the best move.
"""

import logging
from typing import List, Optional, Sequence, Union

import numpy as np

from .config import LogicConfig
from .game_state import GameState, Player, Cell, as_board
from .move_validator import MoveValidator
from .win_checker import WinChecker

logger = logging.getLogger(__name__)

BoardLike = Union[GameState, Sequence[Cell]]


class NoMovesAvailableError(ValueError):
    """Raised when a move is requested for a board with no empty cells."""


class RandomPlayer:
    """
    An AI that picks a uniformly random empty cell.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Args:
            rng: numpy Generator to draw from. Pass a seeded one
                 (np.random.default_rng(seed)) for reproducible games.
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.validator = MoveValidator()

    def get_move(self, board: BoardLike) -> int:
        """
        Get a random move.

        Raises:
            NoMovesAvailableError: if the board is full.
        """
        moves = self.validator.get_available_moves(board)
        if not moves:
            raise NoMovesAvailableError("No empty cells left on the board")

        return moves[int(self.rng.integers(len(moves)))]


class AIPlayer:
    """
    An AI that plays TicTacToe using the Minimax algorithm.

    The AI will always play optimally - it will win if possible,
    block the opponent if needed, and never lose (at worst, draw).
    The full game tree is searched; no pruning is needed on a 3x3 board.
    """

    def __init__(self, player: Player = Player.O, config: Optional[LogicConfig] = None):
        """
        Initialize the AI player.

        Args:
            player: Which symbol the AI controls (default: O)
            config: Scoring constants for the search.
        """
        self.player = player
        self.opponent = player.opposite()
        self.config = config or LogicConfig()
        self.win_checker = WinChecker()
        self.validator = MoveValidator()

        # Keep track of how many positions we've evaluated (for debugging)
        self.moves_evaluated = 0

    def get_move(self, board: BoardLike) -> int:
        """
        Get the best move for the current position.

        Cells are scanned in ascending order and a move replaces the
        current best only if it scores strictly higher, so ties go to
        the lowest index.

        Args:
            board: A 9 cell board or a GameState. It is never modified.

        Returns:
            Index of the best move.

        Raises:
            NoMovesAvailableError: if the board is full.
        """
        self.moves_evaluated = 0

        # Scratch copy; all trial moves are applied and undone on it
        scratch: List[Cell] = list(as_board(board))

        valid_moves = self.validator.get_available_moves(scratch)
        if not valid_moves:
            raise NoMovesAvailableError("No empty cells left on the board")

        best_score = float('-inf')
        best_move = valid_moves[0]

        for index in valid_moves:
            scratch[index] = self.player
            score = self._minimax(scratch, depth=0, is_maximizing=False)
            scratch[index] = None

            if score > best_score:
                best_score = score
                best_move = index

        logger.debug(
            f"AI ({self.player.value}) evaluated {self.moves_evaluated} positions. "
            f"Best move: {best_move} (score: {best_score})"
        )

        return best_move

    def _minimax(self, board: List[Cell], depth: int, is_maximizing: bool) -> int:
        """
        Score a position by exhaustive Minimax search.

        Args:
            board: Scratch board, restored to its input state on return.
            depth: Plies played since the root move.
            is_maximizing: True if it's the AI's turn.

        Returns:
            The score of the position from the AI's point of view.
        """
        self.moves_evaluated += 1

        winner = self.win_checker.check_winner(board)
        if winner == self.player:
            return self.config.WIN_SCORE - depth    # prefer faster wins
        if winner == self.opponent:
            return self.config.LOSS_SCORE + depth   # prefer slower losses

        valid_moves = self.validator.get_available_moves(board)
        if not valid_moves:
            return self.config.TIE_SCORE

        if is_maximizing:
            best = float('-inf')
            for index in valid_moves:
                board[index] = self.player
                best = max(best, self._minimax(board, depth + 1, False))
                board[index] = None
            return best

        best = float('inf')
        for index in valid_moves:
            board[index] = self.opponent
            best = min(best, self._minimax(board, depth + 1, True))
            board[index] = None
        return best

    def get_move_suggestion(self, board: BoardLike) -> str:
        """
        Get a human-readable move suggestion.
        """
        try:
            index = self.get_move(board)
        except NoMovesAvailableError:
            return "No moves available!"

        return f"Place {self.player.value} at cell {index} (row {index // 3}, col {index % 3})"
