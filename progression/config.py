"""
Progression configuration for ranked TicTacToe.
Rank thresholds, score rewards/penalties and streak limits.

Subclass ProgressionConfig and override the tables to retune the
progression curve without touching the policy code.
"""

from .difficulty import Difficulty


class ProgressionConfig:
    """
    Configuration class for scoring and difficulty adaptation.
    """

    # ==================== RANK THRESHOLDS ====================
    # (tier, minimum cumulative score), highest tier first.
    # Thresholds must be strictly descending and end with a 0 catch-all.
    # AVERAGE is never score-derived; it only exists as a preference.
    LEVEL_THRESHOLDS = [
        (Difficulty.DEMIGOD, 6000),
        (Difficulty.ASCENDANT, 5500),
        (Difficulty.IMMORTAL, 5000),
        (Difficulty.LEGEND, 4500),
        (Difficulty.TITAN, 4000),
        (Difficulty.WARLORD, 3500),
        (Difficulty.GRANDMASTER, 3000),
        (Difficulty.STRATEGIST, 2500),
        (Difficulty.ELITE, 2000),
        (Difficulty.SUPERSTAR, 1500),
        (Difficulty.ADVANCED, 500),
        (Difficulty.EASY, 0),
    ]

    # ==================== SINGLE PLAYER SCORING ====================
    # Win bonus curve: (bonus, minimum current score), highest first
    WIN_BONUS_THRESHOLDS = [
        (200, 4500),
        (150, 3000),
        (120, 1500),
        (100, 0),
    ]

    # Points lost per defeat, keyed by the player's score-derived tier
    LOSS_PENALTIES = {
        Difficulty.DEMIGOD: -200,
        Difficulty.ASCENDANT: -150,
        Difficulty.IMMORTAL: -100,
        Difficulty.LEGEND: -50,
        Difficulty.TITAN: -50,
        Difficulty.WARLORD: -50,
        Difficulty.GRANDMASTER: -50,
        Difficulty.STRATEGIST: -50,
        Difficulty.ELITE: -50,
        Difficulty.SUPERSTAR: -50,
        Difficulty.ADVANCED: -20,
        Difficulty.AVERAGE: -20,
        Difficulty.EASY: -20,
    }
    DEFAULT_LOSS_PENALTY = -20

    DRAW_BONUS = 20

    # ==================== DIFFICULTY DOWNGRADE ====================
    # Consecutive losses that force the lowest tier
    LOSS_STREAK_RESET = 10
    # Losses + draws that force the lowest tier
    STRUGGLE_RESET = 5
    # Losses + draws that demote to the second lowest tier
    STRUGGLE_DEMOTE = 3

    # ==================== TWO PLAYER SCORING ====================
    TWO_PLAYER_WIN_BONUS = 100
    TWO_PLAYER_DRAW_BONUS = 20
