"""
Match session for ranked TicTacToe.

Owns one board and drives the turn sequence:
human move -> evaluate -> (AI's turn) AI move after a short delay -> evaluate.
When the match ends the progression policy updates the players' records
and the session saves them to the injected record store.
"""

import logging
import threading
from typing import Callable, List, Optional, Sequence, Union

import numpy as np

from logic.ai_player import AIPlayer, RandomPlayer
from logic.game_state import GameState, Player
from logic.move_validator import MoveValidator
from logic.win_checker import MatchResult, MatchStatus, WinChecker
from progression.difficulty import Difficulty
from progression.policy import GameMode, Outcome, ProgressionPolicy, ScoreChange
from progression.ranks import get_level
from progression.records import PlayerRecord, RecordStore

from .config import MatchConfig

logger = logging.getLogger(__name__)

# Same call signature as threading.Timer(interval, function, args=...)
TimerFactory = Callable[..., "threading.Timer"]


def create_ai_player(difficulty: Difficulty, player: Player,
                     rng: Optional[np.random.Generator] = None) -> Union[RandomPlayer, AIPlayer]:
    """
    Pick the AI strategy for a difficulty tier.

    The lowest tier plays random moves; every other tier plays Minimax.
    """
    if difficulty == Difficulty.lowest():
        return RandomPlayer(rng)
    return AIPlayer(player)


class MatchSession:
    """
    A single match between a human and the AI, or two local humans.

    Game flow (single player):
    1. Human places a symbol with handle_move()
    2. Board is evaluated for a win or draw
    3. If the AI is to move, its move is scheduled behind a short timer
    4. When the timer fires the AI moves and the board is evaluated again
    5. At game end each player's record is updated and saved

    The first match begins when the session is created; start() or
    reset() begins another. While the AI move is pending no human input
    is accepted. reset() and
    abandon() cancel a pending AI move; a timer that still fires after
    that is ignored.
    """

    def __init__(
        self,
        mode: GameMode,
        store: RecordStore,
        player_names: Sequence[str],
        human_symbol: Player = Player.X,
        config: Optional[MatchConfig] = None,
        policy: Optional[ProgressionPolicy] = None,
        rng: Optional[np.random.Generator] = None,
        timer_factory: TimerFactory = threading.Timer,
    ):
        """
        Args:
            mode: Single player (vs AI) or two player.
            store: Where player records are read from and saved to.
            player_names: [human] for single player, [first, second] for
                two player; the first name plays human_symbol.
            human_symbol: Symbol of the (first) human. X always moves first.
            config: Timing and AI strength settings.
            policy: Progression policy applied at game end.
            rng: numpy Generator for think times and the random AI.
            timer_factory: Builds the cancellable AI delay timer.
        """
        expected = 1 if mode == GameMode.SINGLE_PLAYER else 2
        if len(player_names) != expected:
            raise ValueError(f"{mode.value} needs {expected} player name(s), got {len(player_names)}")

        self.mode = mode
        self.store = store
        self.player_names = list(player_names)
        self.human_symbol = human_symbol
        self.config = config or MatchConfig()
        self.policy = policy or ProgressionPolicy()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.timer_factory = timer_factory

        self.validator = MoveValidator()
        self.win_checker = WinChecker()

        self.game_state = GameState()
        self.last_result: Optional[MatchResult] = None
        self.last_changes: List[ScoreChange] = []

        self._lock = threading.RLock()
        self._pending_timer = None
        self._ai_thinking = False
        # Bumped on every start/reset/abandon so stale timers can be spotted
        self._generation = 0

        for name in self.player_names:
            self.store.get_or_create(name)

        # The match is live from construction; the AI opens if it holds X
        self._maybe_schedule_ai()

    # ==================== PROPERTIES ====================

    @property
    def ai_symbol(self) -> Optional[Player]:
        if self.mode != GameMode.SINGLE_PLAYER:
            return None
        return self.human_symbol.opposite()

    @property
    def is_ai_thinking(self) -> bool:
        return self._ai_thinking

    @property
    def is_game_over(self) -> bool:
        return self.game_state.is_game_over

    def player_for(self, symbol: Player) -> Optional[str]:
        """Name of the human playing a symbol (None for the AI)."""
        if symbol == self.human_symbol:
            return self.player_names[0]
        if self.mode == GameMode.TWO_PLAYER:
            return self.player_names[1]
        return None

    def ai_difficulty(self) -> Difficulty:
        """
        Tier the AI plays at for the current human.

        Follows the human's score-derived rank, or their stored
        preference when USE_RANK_DIFFICULTY is off.
        """
        record = self.store.get_or_create(self.player_names[0])
        if self.config.USE_RANK_DIFFICULTY:
            return get_level(record.score, self.policy.config)
        return record.preferred_difficulty

    # ==================== GAME FLOW ====================

    def start(self, human_symbol: Optional[Player] = None):
        """
        Start a fresh match, cancelling anything still pending.

        Args:
            human_symbol: Switch the (first) human's symbol for this match.
        """
        with self._lock:
            self._cancel_pending()
            if human_symbol is not None:
                self.human_symbol = human_symbol

            self.game_state = GameState()
            self.last_result = None
            self.last_changes = []

            logger.info(
                f"New {self.mode.value} match: {', '.join(self.player_names)} "
                f"(human plays {self.human_symbol.value})"
            )
            self._maybe_schedule_ai()

    def reset(self):
        """Reset the board for a new round with the same players."""
        self.start()

    def abandon(self):
        """
        Leave the match without scoring it.
        """
        with self._lock:
            self._cancel_pending()
            self.game_state.is_game_over = True
            logger.info("Match abandoned")

    def handle_move(self, index: int) -> bool:
        """
        Process a human move.

        Args:
            index: Cell index (0-8).

        Returns:
            True if the move was played.
        """
        with self._lock:
            if self._ai_thinking:
                logger.warning(f"Ignoring move {index}: AI move is pending")
                return False

            if (self.mode == GameMode.SINGLE_PLAYER
                    and self.game_state.current_player != self.human_symbol):
                logger.warning(f"Ignoring move {index}: not the human's turn")
                return False

            validation = self.validator.validate_move(self.game_state, index)
            if not validation.is_valid:
                logger.warning(validation.error_message)
                return False

            self.game_state.make_move(index)
            self._after_move()
            return True

    # ==================== INTERNALS ====================

    def _think_time(self) -> float:
        """Randomized delay before the AI moves, in seconds."""
        jitter = self.rng.random() * self.config.THINK_TIME_JITTER_MS
        return (self.config.THINK_TIME_MIN_MS + jitter) / 1000.0

    def _maybe_schedule_ai(self):
        if (self.ai_symbol is None
                or self.game_state.is_game_over
                or self.game_state.current_player != self.ai_symbol
                or self._ai_thinking):
            return

        self._ai_thinking = True
        timer = self.timer_factory(self._think_time(), self._ai_turn, args=(self._generation,))
        timer.daemon = True
        self._pending_timer = timer
        timer.start()

    def _ai_turn(self, generation: int):
        """Timer callback: play the AI move for the match it was scheduled in."""
        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale AI move from a reset match")
                return

            self._pending_timer = None
            self._ai_thinking = False

            if self.game_state.is_game_over:
                return

            difficulty = self.ai_difficulty()
            ai = create_ai_player(difficulty, self.ai_symbol, self.rng)
            move = ai.get_move(self.game_state.board)

            logger.info(f"AI ({difficulty.value}) plays {self.ai_symbol.value} at cell {move}")
            self.game_state.make_move(move)
            self._after_move()

    def _after_move(self):
        result = self.win_checker.update_game_state(self.game_state)
        if result.is_over:
            self._finish(result)
        else:
            self._maybe_schedule_ai()

    def _cancel_pending(self):
        self._generation += 1
        if self._pending_timer is not None:
            self._pending_timer.cancel()
            self._pending_timer = None
        self._ai_thinking = False

    def _outcome_for(self, symbol: Player, result: MatchResult) -> Outcome:
        if result.status == MatchStatus.DRAW:
            return Outcome.DRAW
        return Outcome.WIN if result.winner == symbol else Outcome.LOSS

    def _finish(self, result: MatchResult):
        """Score the finished match and save the updated records."""
        self.last_result = result
        self.last_changes = []

        symbols = [self.human_symbol]
        if self.mode == GameMode.TWO_PLAYER:
            symbols.append(self.human_symbol.opposite())

        for symbol in symbols:
            name = self.player_for(symbol)
            record: PlayerRecord = self.store.get_or_create(name)
            outcome = self._outcome_for(symbol, result)

            updated, change = self.policy.apply_with_change(outcome, self.mode, record)
            self.store.save(updated)
            self.last_changes.append(change)

        if result.status == MatchStatus.WIN:
            logger.info(f"{result.winner.value} wins along {result.line}")
        else:
            logger.info("Match drawn")
        for change in self.last_changes:
            logger.info(change.describe())
