"""
Tests for the match session: turn flow, the AI delay timer and scoring.

Timers are replaced with FakeTimer so the AI move fires only when a test
calls fire().
"""

import numpy as np
import pytest
from dataclasses import replace

from logic.ai_player import AIPlayer, RandomPlayer
from logic.game_state import Player
from logic.win_checker import MatchStatus
from match.config import MatchConfig
from match.session import MatchSession, create_ai_player
from progression.difficulty import Difficulty
from progression.policy import GameMode
from progression.records import InMemoryRecordStore


class FakeTimer:
    """Stands in for threading.Timer; fires on demand."""

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function(*self.args, **self.kwargs)


@pytest.fixture
def timers():
    return []


@pytest.fixture
def timer_factory(timers):
    def factory(interval, function, args=None, kwargs=None):
        timer = FakeTimer(interval, function, args, kwargs)
        timers.append(timer)
        return timer
    return factory


@pytest.fixture
def store():
    return InMemoryRecordStore()


def single_player(store, timer_factory, human_symbol=Player.X, score=0, config=None):
    store.save(replace(store.get_or_create("ana"), score=score))
    session = MatchSession(
        GameMode.SINGLE_PLAYER, store, ["ana"],
        human_symbol=human_symbol,
        config=config,
        rng=np.random.default_rng(3),
        timer_factory=timer_factory,
    )
    session.start()
    return session


def test_ai_move_waits_for_the_timer(store, timer_factory, timers):
    session = single_player(store, timer_factory)

    assert session.handle_move(0)
    assert session.is_ai_thinking
    assert len(timers) == 1
    assert timers[0].started
    assert timers[0].daemon
    assert 0.08 <= timers[0].interval <= 0.15
    assert session.game_state.board.count(Player.O) == 0

    timers[0].fire()

    assert not session.is_ai_thinking
    assert session.game_state.board.count(Player.O) == 1
    assert session.game_state.current_player == Player.X


def test_human_input_is_blocked_while_ai_is_pending(store, timer_factory, timers):
    session = single_player(store, timer_factory)
    session.handle_move(4)

    assert not session.handle_move(0)
    assert session.game_state.board[0] is None
    assert len(timers) == 1


def test_reset_cancels_pending_ai_move(store, timer_factory, timers):
    session = single_player(store, timer_factory)
    session.handle_move(4)
    stale = timers[0]

    session.reset()
    assert stale.cancelled
    assert not session.is_ai_thinking

    # Even if the timer callback still runs, the new board is untouched
    stale.function(*stale.args)
    assert session.game_state.get_empty_cells() == list(range(9))


def test_abandon_cancels_pending_ai_move(store, timer_factory, timers):
    session = single_player(store, timer_factory)
    session.handle_move(4)

    session.abandon()
    assert timers[0].cancelled
    assert session.is_game_over
    assert not session.handle_move(0)
    assert store.get("ana").games_played == 0


def test_ai_opens_when_human_plays_o(store, timer_factory, timers):
    session = single_player(store, timer_factory, human_symbol=Player.O)

    assert session.ai_symbol == Player.X
    assert session.is_ai_thinking
    assert not session.handle_move(4)

    # start() replaced the opening move scheduled by the constructor
    assert len(timers) == 2
    assert timers[0].cancelled
    timers[-1].fire()
    assert session.game_state.board.count(Player.X) == 1
    assert session.handle_move(session.game_state.get_empty_cells()[0])


def test_new_session_opens_for_the_ai_without_start(store, timer_factory, timers):
    session = MatchSession(
        GameMode.SINGLE_PLAYER, store, ["ana"],
        human_symbol=Player.O,
        rng=np.random.default_rng(3),
        timer_factory=timer_factory,
    )

    assert session.is_ai_thinking
    assert len(timers) == 1
    assert timers[0].started

    timers[0].fire()
    assert session.game_state.board.count(Player.X) == 1
    assert session.game_state.current_player == Player.O
    assert session.handle_move(session.game_state.get_empty_cells()[0])


def test_new_session_waits_for_the_human_playing_x(store, timer_factory, timers):
    session = MatchSession(GameMode.SINGLE_PLAYER, store, ["ana"], timer_factory=timer_factory)

    assert not session.is_ai_thinking
    assert timers == []
    assert session.handle_move(4)
    assert len(timers) == 1


def test_occupied_cell_is_rejected(store, timer_factory, timers):
    session = single_player(store, timer_factory)
    session.handle_move(0)
    timers[0].fire()

    ai_cell = next(i for i, c in enumerate(session.game_state.board) if c == Player.O)
    assert not session.handle_move(ai_cell)
    assert not session.handle_move(0)


def test_losing_to_minimax_applies_tier_penalty(store, timer_factory, timers):
    # 500 points = Advanced rank, so the AI plays Minimax
    session = single_player(store, timer_factory, score=500)
    assert session.ai_difficulty() == Difficulty.ADVANCED

    session.handle_move(0)
    timers[-1].fire()
    assert session.game_state.board[4] == Player.O   # only drawing reply to a corner

    session.handle_move(1)
    timers[-1].fire()
    assert session.game_state.board[2] == Player.O   # forced block

    session.handle_move(8)                          # ignores the 2-4-6 threat
    timers[-1].fire()

    assert session.is_game_over
    assert session.last_result.status == MatchStatus.WIN
    assert session.last_result.winner == Player.O
    assert session.last_result.line == (2, 4, 6)

    record = store.get("ana")
    assert record.score == 480
    assert record.losses_count == 1
    assert record.losses == 1
    assert session.last_changes[0].points == -20


def test_preferred_difficulty_can_drive_the_ai(store, timer_factory):
    class PreferenceConfig(MatchConfig):
        USE_RANK_DIFFICULTY = False

    session = single_player(store, timer_factory, score=3000, config=PreferenceConfig())
    assert session.ai_difficulty() == Difficulty.EASY

    store.save(replace(store.get("ana"), preferred_difficulty=Difficulty.TITAN))
    assert session.ai_difficulty() == Difficulty.TITAN


def test_create_ai_player():
    assert isinstance(create_ai_player(Difficulty.EASY, Player.O), RandomPlayer)
    hard = create_ai_player(Difficulty.AVERAGE, Player.O)
    assert isinstance(hard, AIPlayer)
    assert hard.player == Player.O


def two_player(store, timer_factory):
    session = MatchSession(
        GameMode.TWO_PLAYER, store, ["ana", "bo"],
        timer_factory=timer_factory,
    )
    session.start()
    return session


def test_two_player_win_scores_the_winner_only(store, timer_factory, timers):
    session = two_player(store, timer_factory)
    for index in (0, 3, 1, 4, 2):
        assert session.handle_move(index)

    assert timers == []
    assert session.last_result.winner == Player.X
    assert store.get("ana").score == 100
    assert store.get("bo").score == 0
    assert store.get("bo").games_played == 1


def test_two_player_draw_scores_both(store, timer_factory):
    session = two_player(store, timer_factory)
    for index in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        assert session.handle_move(index)

    assert session.last_result.status == MatchStatus.DRAW
    assert store.get("ana").score == 20
    assert store.get("bo").score == 20
    assert [c.points for c in session.last_changes] == [20, 20]


def test_player_names_must_match_mode(store):
    with pytest.raises(ValueError):
        MatchSession(GameMode.TWO_PLAYER, store, ["ana"])
