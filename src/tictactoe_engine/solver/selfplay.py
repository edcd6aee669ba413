"""
Engine-vs-engine games for validating difficulty tiers.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from tqdm import tqdm

from ..core import Board, Mark, apply_move, is_terminal, next_to_move, winner
from .policy import Difficulty, RandomSource, choose_move

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    """One finished game."""

    moves: List[Tuple[Mark, int]] = field(default_factory=list)
    final_board: Board = field(default_factory=Board.empty)
    winner: Optional[Mark] = None

    @property
    def is_draw(self) -> bool:
        return self.winner is None


@dataclass
class MatchSummary:
    """Aggregate results of a batch of games."""

    first_difficulty: Difficulty
    second_difficulty: Difficulty
    games: int = 0
    first_wins: int = 0
    second_wins: int = 0
    draws: int = 0


def play_game(
    first_difficulty: Union[Difficulty, str],
    second_difficulty: Union[Difficulty, str],
    rng: Optional[RandomSource] = None,
    first: Mark = Mark.X,
    second: Mark = Mark.O,
    board: Optional[Board] = None,
) -> GameRecord:
    """
    Play one game to completion.

    Args:
        first_difficulty: Tier for the player moving first
        second_difficulty: Tier for the other player
        rng: Shared random source for both players
        first: Mark of the player moving first
        second: Mark of the other player
        board: Starting board (empty if omitted)

    Returns:
        GameRecord with the move list, final board and winner
    """
    if rng is None:
        rng = random.Random()

    tiers = {
        first: Difficulty.parse(first_difficulty),
        second: Difficulty.parse(second_difficulty),
    }
    opponent = {first: second, second: first}

    record = GameRecord(final_board=board if board is not None else Board.empty())
    turn = next_to_move(record.final_board, first, second)

    while not is_terminal(record.final_board):
        move = choose_move(record.final_board, turn, opponent[turn], tiers[turn], rng=rng)
        record.final_board = apply_move(record.final_board, move, turn)
        record.moves.append((turn, move))
        turn = opponent[turn]

    record.winner = winner(record.final_board)
    logger.debug(f"Game over after {len(record.moves)} moves, winner={record.winner}")
    return record


def run_matches(
    games: int,
    first_difficulty: Union[Difficulty, str],
    second_difficulty: Union[Difficulty, str],
    rng: Optional[RandomSource] = None,
    progress: bool = True,
) -> MatchSummary:
    """
    Play a batch of games between two tiers.

    Args:
        games: Number of games
        first_difficulty: Tier moving first (plays X)
        second_difficulty: Tier moving second (plays O)
        rng: Random source shared across all games
        progress: Show a tqdm progress bar

    Returns:
        MatchSummary
    """
    if games < 0:
        raise ValueError(f"Number of games must be non-negative, got {games}")
    if rng is None:
        rng = random.Random()

    summary = MatchSummary(
        first_difficulty=Difficulty.parse(first_difficulty),
        second_difficulty=Difficulty.parse(second_difficulty),
    )

    logger.info(
        f"Playing {games} games: {summary.first_difficulty} (X) vs "
        f"{summary.second_difficulty} (O)"
    )

    for _ in tqdm(range(games), desc="Self-play", unit=" game", disable=not progress):
        record = play_game(summary.first_difficulty, summary.second_difficulty, rng=rng)
        summary.games += 1
        if record.winner == Mark.X:
            summary.first_wins += 1
        elif record.winner == Mark.O:
            summary.second_wins += 1
        else:
            summary.draws += 1

    logger.info(
        f"Results: X wins {summary.first_wins}, O wins {summary.second_wins}, "
        f"draws {summary.draws}"
    )
    return summary
