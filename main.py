"""
Command line tools for ranked TicTacToe.

- simulate: play AI vs AI matches and print the tallies
- rank:     show the rank tier for a score
- progress: replay a sequence of outcomes onto a fresh player record

Run `python main.py <command> --help` for options.
"""

import argparse
import logging
import sys
from typing import List, Optional, Union

import numpy as np

from logic.ai_player import AIPlayer, RandomPlayer
from logic.game_state import GameState, Player
from logic.win_checker import WinChecker
from progression.difficulty import Difficulty
from progression.policy import GameMode, Outcome, ProgressionPolicy
from progression.ranks import get_level, next_level
from progression.records import PlayerRecord

# Simulation result buckets for np.bincount
X_WINS, O_WINS, DRAWS = 0, 1, 2

OUTCOME_CODES = {
    "w": Outcome.WIN, "win": Outcome.WIN,
    "l": Outcome.LOSS, "loss": Outcome.LOSS,
    "d": Outcome.DRAW, "draw": Outcome.DRAW,
}


def make_player(kind: str, symbol: Player, rng: np.random.Generator) -> Union[AIPlayer, RandomPlayer]:
    if kind == "random":
        return RandomPlayer(rng)
    return AIPlayer(symbol)


def play_match(x_player, o_player, win_checker: Optional[WinChecker] = None) -> GameState:
    """
    Play one match between two AIs to completion.

    Returns:
        The final game state.
    """
    win_checker = win_checker or WinChecker()
    game_state = GameState()
    players = {Player.X: x_player, Player.O: o_player}

    while not game_state.is_game_over:
        move = players[game_state.current_player].get_move(game_state.board)
        game_state.make_move(move)
        win_checker.update_game_state(game_state)

    return game_state


def simulate(games: int, x_kind: str, o_kind: str, seed: Optional[int] = None) -> np.ndarray:
    """
    Play a batch of AI vs AI matches.

    Returns:
        Counts indexed by X_WINS, O_WINS, DRAWS.
    """
    rng = np.random.default_rng(seed)
    x_player = make_player(x_kind, Player.X, rng)
    o_player = make_player(o_kind, Player.O, rng)
    win_checker = WinChecker()

    results = np.empty(games, dtype=np.int64)
    for i in range(games):
        final = play_match(x_player, o_player, win_checker)
        if final.winner == Player.X:
            results[i] = X_WINS
        elif final.winner == Player.O:
            results[i] = O_WINS
        else:
            results[i] = DRAWS

    return np.bincount(results, minlength=3)


def cmd_simulate(args) -> int:
    counts = simulate(args.games, args.x, args.o, args.seed)
    total = max(1, int(counts.sum()))

    print("\n" + "=" * 40)
    print(f"   {args.games} games: X={args.x}  O={args.o}")
    print("=" * 40)
    for label, idx in (("X wins", X_WINS), ("O wins", O_WINS), ("Draws", DRAWS)):
        print(f"  {label:<7} {int(counts[idx]):>6}  ({100.0 * counts[idx] / total:5.1f}%)")
    print("=" * 40 + "\n")
    return 0


def cmd_rank(args) -> int:
    level = get_level(args.score)
    print(f"Score {args.score}: {level.value}")

    upcoming = next_level(args.score)
    if upcoming is None:
        print("Top rank reached!")
    else:
        tier, needed = upcoming
        print(f"Next rank: {tier.value} in {needed} points")
    return 0


def cmd_progress(args) -> int:
    mode = GameMode.TWO_PLAYER if args.two_player else GameMode.SINGLE_PLAYER
    policy = ProgressionPolicy()
    record = PlayerRecord(
        name=args.name,
        score=args.score,
        preferred_difficulty=Difficulty.from_label(args.difficulty),
    )

    print(f"{record.name}: {record.score} points, {record.preferred_difficulty.value}")
    for code in args.outcomes:
        outcome = OUTCOME_CODES.get(code.lower())
        if outcome is None:
            print(f"Unknown outcome {code!r} (use W, L or D)")
            return 2

        record, change = policy.apply_with_change(outcome, mode, record)
        print(
            f"  {outcome.value:<4} {change.points:+5d} -> {record.score:>5} "
            f"[{get_level(record.score).value}] "
            f"difficulty={record.preferred_difficulty.value} "
            f"streak L{record.losses_count}/D{record.draws_count}"
        )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ranked TicTacToe tools")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging (search statistics, demotions)"
    )
    sub = parser.add_subparsers(dest="command")
    sub.required = True

    p_sim = sub.add_parser("simulate", help="Play AI vs AI matches")
    p_sim.add_argument("--games", type=int, default=100, help="Number of matches")
    p_sim.add_argument("--x", choices=["minimax", "random"], default="random", help="Strategy playing X")
    p_sim.add_argument("--o", choices=["minimax", "random"], default="minimax", help="Strategy playing O")
    p_sim.add_argument("--seed", type=int, default=None, help="Random seed")
    p_sim.set_defaults(func=cmd_simulate)

    p_rank = sub.add_parser("rank", help="Show the rank for a score")
    p_rank.add_argument("score", type=int)
    p_rank.set_defaults(func=cmd_rank)

    p_prog = sub.add_parser("progress", help="Replay outcomes (W/L/D) onto a player record")
    p_prog.add_argument("outcomes", nargs="+", help="Sequence of W, L or D")
    p_prog.add_argument("--name", default="player")
    p_prog.add_argument("--score", type=int, default=0, help="Starting score")
    p_prog.add_argument("--difficulty", default="Easy", help="Starting difficulty preference")
    p_prog.add_argument("--two-player", action="store_true", help="Use two player scoring")
    p_prog.set_defaults(func=cmd_progress)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
