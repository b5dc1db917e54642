"""
Game logic configuration for ranked TicTacToe.
Board geometry and minimax scoring constants.
"""


class LogicConfig:
    """
    Configuration for the game rules and the search AI.
    """

    # ==================== BOARD SETTINGS ====================
    BOARD_SIZE = 3
    BOARD_CELLS = BOARD_SIZE * BOARD_SIZE  # 9 cells, row-major

    # ==================== MINIMAX SCORES ====================
    # Terminal scores are adjusted by search depth so the AI prefers
    # the fastest win and the slowest loss
    WIN_SCORE = 10
    LOSS_SCORE = -10
    TIE_SCORE = 0
