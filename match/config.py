"""
Match configuration for ranked TicTacToe.
Timing of the AI's simulated "thinking" pause.
"""


class MatchConfig:
    """
    Configuration for a match session.
    """

    # ==================== AI THINK TIME ====================
    # The AI's move is delayed by MIN + uniform(0, JITTER) milliseconds.
    # Purely cosmetic: the search itself runs synchronously when the
    # timer fires.
    THINK_TIME_MIN_MS = 80
    THINK_TIME_JITTER_MS = 70

    # ==================== AI STRENGTH ====================
    # True: AI strength follows the human's score-derived rank.
    # False: use the difficulty preference stored on the player record.
    USE_RANK_DIFFICULTY = True
