"""
Game state management for ranked TicTacToe.
Tracks the board, current player, and move history.
"""

from enum import Enum
from typing import Optional, List, Sequence, Union
from dataclasses import dataclass, field

from .config import LogicConfig


class Player(Enum):
    """The two symbols in the game. X always moves first."""
    X = "X"
    O = "O"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.O if self == Player.X else Player.X


# A cell is a Player or None (empty)
Cell = Optional[Player]
Board = List[Cell]

BOARD_CELLS = LogicConfig.BOARD_CELLS


def empty_board() -> Board:
    """A fresh board with all 9 cells empty."""
    return [None] * BOARD_CELLS


def board_from_string(text: str) -> Board:
    """
    Build a board from a 9 character string, e.g. "XX.OO....".

    Any character other than X or O is treated as empty.
    """
    text = text.replace(" ", "").replace("\n", "").replace("|", "")
    if len(text) != BOARD_CELLS:
        raise ValueError(f"Board string must have {BOARD_CELLS} cells, got {len(text)}")

    board = empty_board()
    for i, ch in enumerate(text.upper()):
        if ch == "X":
            board[i] = Player.X
        elif ch == "O":
            board[i] = Player.O
    return board


def board_to_string(board: Sequence[Cell]) -> str:
    """Inverse of board_from_string, using '.' for empty cells."""
    return "".join(cell.value if cell is not None else "." for cell in board)


@dataclass
class Move:
    """
    A move in the game.
    """
    player: Player          # Who made the move
    index: int              # Cell index (0-8, row-major)
    move_number: int        # Which move of the game this is (0-8)


@dataclass
class GameState:
    """
    The complete state of a TicTacToe match.

    Tracks:
    - The 9 cell board (row-major)
    - Current player
    - Move history
    - Game status (ongoing, won, draw)
    """

    board: Board = field(default_factory=empty_board)

    # X always makes the first move
    current_player: Player = Player.X

    moves: List[Move] = field(default_factory=list)

    # Game result
    winner: Optional[Player] = None
    is_draw: bool = False
    is_game_over: bool = False

    def make_move(self, index: int) -> bool:
        """
        Place the current player's symbol at the given cell.

        Args:
            index: Cell index (0-8).

        Returns:
            True if move was successful, False otherwise.
        """
        if self.is_game_over:
            return False

        if not 0 <= index < BOARD_CELLS:
            return False

        if self.board[index] is not None:
            return False

        self.board[index] = self.current_player
        self.moves.append(Move(
            player=self.current_player,
            index=index,
            move_number=len(self.moves)
        ))

        # Winner detection is done by WinChecker; just switch turns here
        self.current_player = self.current_player.opposite()

        return True

    def get_empty_cells(self) -> List[int]:
        """Indices of all empty cells, ascending."""
        return [i for i, cell in enumerate(self.board) if cell is None]


def as_board(board_or_state: Union[GameState, Sequence[Cell]]) -> Sequence[Cell]:
    """Accept either a GameState or a raw board and return the board."""
    if isinstance(board_or_state, GameState):
        return board_or_state.board
    return board_or_state
