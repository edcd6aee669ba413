"""Move search and selection."""

from .tactical import find_winning_move, tactical_move
from .minimax import AlphaBetaSearch, SearchResult, search, optimal_move
from .policy import Difficulty, DEFAULT_DIFFICULTY, RandomSource, choose_move, weak_move
from .selfplay import GameRecord, MatchSummary, play_game, run_matches

__all__ = [
    "find_winning_move",
    "tactical_move",
    "AlphaBetaSearch",
    "SearchResult",
    "search",
    "optimal_move",
    "Difficulty",
    "DEFAULT_DIFFICULTY",
    "RandomSource",
    "choose_move",
    "weak_move",
    "GameRecord",
    "MatchSummary",
    "play_game",
    "run_matches",
]
