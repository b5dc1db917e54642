"""
Win checker for ranked TicTacToe.
Checks if a player has won or if the game is a draw.
"""

from enum import Enum
from typing import Optional, Sequence, Tuple, Union
from dataclasses import dataclass

from .game_state import GameState, Player, Cell, as_board


BoardLike = Union[GameState, Sequence[Cell]]
Line = Tuple[int, int, int]


class MatchStatus(Enum):
    """Verdict for a board snapshot."""
    ONGOING = "ongoing"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class MatchResult:
    """
    Result of evaluating a board.

    winner and line are only set when status is WIN.
    """
    status: MatchStatus
    winner: Optional[Player] = None
    line: Optional[Line] = None

    @property
    def is_over(self) -> bool:
        return self.status != MatchStatus.ONGOING


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 identical symbols in a row
    (horizontally, vertically, or diagonally)
    """

    # All possible winning lines as cell indices (row-major)
    WINNING_LINES: Tuple[Line, ...] = (
        # Rows
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        # Columns
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        # Diagonals
        (0, 4, 8),
        (2, 4, 6),
    )

    def check_winner(self, board: BoardLike) -> Optional[Player]:
        """
        Check if there's a winner.

        Args:
            board: A 9 cell board or a GameState.

        Returns:
            The winning Player, or None if no winner yet.
        """
        line = self.get_winning_line(board)
        if line is None:
            return None
        return as_board(board)[line[0]]

    def get_winning_line(self, board: BoardLike) -> Optional[Line]:
        """
        Get the first completed line, if there is one.

        Returns:
            The winning line as a triple of indices, or None.
        """
        cells = as_board(board)
        for line in self.WINNING_LINES:
            a, b, c = line
            if cells[a] is not None and cells[a] == cells[b] == cells[c]:
                return line
        return None

    def is_full(self, board: BoardLike) -> bool:
        """True iff no cell is empty."""
        return all(cell is not None for cell in as_board(board))

    def check_draw(self, board: BoardLike) -> bool:
        """
        Check if the game is a draw: board full AND no winner.
        """
        return self.check_winner(board) is None and self.is_full(board)

    def evaluate(self, board: BoardLike) -> MatchResult:
        """
        Classify a board as won, drawn or still ongoing.

        A winning line takes priority over a full board.
        """
        line = self.get_winning_line(board)
        if line is not None:
            return MatchResult(MatchStatus.WIN, winner=as_board(board)[line[0]], line=line)

        if self.is_full(board):
            return MatchResult(MatchStatus.DRAW)

        return MatchResult(MatchStatus.ONGOING)

    def update_game_state(self, game_state: GameState) -> MatchResult:
        """
        Write winner/draw information into the game state.

        Args:
            game_state: The game state to update.

        Returns:
            The evaluated MatchResult.
        """
        result = self.evaluate(game_state.board)

        if result.status == MatchStatus.WIN:
            game_state.winner = result.winner
            game_state.is_game_over = True
        elif result.status == MatchStatus.DRAW:
            game_state.is_draw = True
            game_state.is_game_over = True

        return result
