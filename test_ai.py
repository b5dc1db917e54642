"""
Tests for the random and Minimax AI players.
"""

import logging

import numpy as np
import pytest

from logic.config import LogicConfig
from logic.ai_player import AIPlayer, RandomPlayer, NoMovesAvailableError
from logic.game_state import Player, empty_board, board_from_string
from main import play_match


def test_takes_the_winning_move():
    board = board_from_string("XX." "OO." "...")
    assert AIPlayer(Player.X).get_move(board) == 2


def test_blocks_the_opponent():
    board = board_from_string("OO." "X.." "...")
    assert AIPlayer(Player.X).get_move(board) == 2


def test_prefers_winning_over_blocking():
    # X threatens 6 and 8; O completes its own column at 6
    board = board_from_string("O.X" "OXX" "...")
    assert AIPlayer(Player.O).get_move(board) == 6


def test_ties_go_to_the_lowest_index():
    # O wins immediately at both 2 and 6
    board = board_from_string("OO." "OXX" ".X.")
    assert AIPlayer(Player.O).get_move(board) == 2


def test_answers_corner_opening_with_center():
    board = board_from_string("X.." "..." "...")
    assert AIPlayer(Player.O).get_move(board) == 4


def test_does_not_modify_the_callers_board():
    board = board_from_string("X.." ".O." "..X")
    before = list(board)
    AIPlayer(Player.O).get_move(board)
    assert board == before


def test_counts_evaluated_positions(caplog):
    ai = AIPlayer(Player.X)
    with caplog.at_level(logging.DEBUG, logger="logic.ai_player"):
        ai.get_move(board_from_string("XX." "OO." "..."))

    assert ai.moves_evaluated > 0
    assert f"AI (X) evaluated {ai.moves_evaluated} positions. Best move: 2" in caplog.text


def test_each_player_gets_its_own_config():
    class Custom(LogicConfig):
        WIN_SCORE = 50

    assert AIPlayer(Player.X).config is not AIPlayer(Player.O).config
    assert AIPlayer(Player.X, Custom()).config.WIN_SCORE == 50
    assert AIPlayer(Player.X).config.WIN_SCORE == 10


def test_last_empty_cell():
    board = board_from_string("XOX" "XOO" "OX.")
    assert AIPlayer(Player.X).get_move(board) == 8
    assert RandomPlayer(np.random.default_rng(0)).get_move(board) == 8


def test_full_board_raises():
    board = board_from_string("XOX" "XOO" "OXX")
    with pytest.raises(NoMovesAvailableError):
        AIPlayer(Player.X).get_move(board)
    with pytest.raises(NoMovesAvailableError):
        RandomPlayer().get_move(board)


def test_random_player_only_picks_empty_cells():
    board = board_from_string("X.O" ".X." "O..")
    player = RandomPlayer(np.random.default_rng(7))
    picks = {player.get_move(board) for _ in range(200)}
    assert picks == {1, 3, 5, 7, 8}


def test_random_player_is_reproducible_with_seed():
    board = empty_board()
    a = RandomPlayer(np.random.default_rng(42))
    b = RandomPlayer(np.random.default_rng(42))
    assert [a.get_move(board) for _ in range(20)] == [b.get_move(board) for _ in range(20)]


def test_self_play_is_a_draw():
    final = play_match(AIPlayer(Player.X), AIPlayer(Player.O))
    assert final.is_game_over
    assert final.is_draw
    assert final.winner is None


def test_minimax_second_never_loses_to_random():
    rng = np.random.default_rng(1234)
    for _ in range(15):
        final = play_match(RandomPlayer(rng), AIPlayer(Player.O))
        assert final.winner != Player.X


def test_minimax_first_never_loses_to_random():
    rng = np.random.default_rng(99)
    for _ in range(2):
        final = play_match(AIPlayer(Player.X), RandomPlayer(rng))
        assert final.winner != Player.O


def test_move_suggestion_text():
    suggestion = AIPlayer(Player.X).get_move_suggestion(board_from_string("XX." "OO." "..."))
    assert suggestion == "Place X at cell 2 (row 0, col 2)"
    assert AIPlayer(Player.X).get_move_suggestion(board_from_string("XOXXOOOXX")) == "No moves available!"
