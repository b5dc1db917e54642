"""
Move validator for ranked TicTacToe.
Enumerates legal moves and validates human input.
"""

from typing import List, Optional, Sequence, Union
from dataclasses import dataclass

from .game_state import GameState, Cell, BOARD_CELLS, as_board


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Can only place on empty cells
    2. Index must be on the board (0-8)
    3. Game must not be over
    """

    def get_available_moves(self, board: Union[GameState, Sequence[Cell]]) -> List[int]:
        """
        Get all empty cells.

        Args:
            board: A 9 cell board or a GameState.

        Returns:
            Indices of empty cells in ascending order ([] on a full board).
        """
        return [i for i, cell in enumerate(as_board(board)) if cell is None]

    def validate_move(self, game_state: GameState, index: int) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            index: Cell to place the current player's symbol on.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if game_state.is_game_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        if not 0 <= index < BOARD_CELLS:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {index}. Must be 0-{BOARD_CELLS - 1}."
            )

        occupant = game_state.board[index]
        if occupant is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {occupant.value}"
            )

        return ValidationResult(is_valid=True)
