"""Tests for difficulty-tiered move selection."""

import random

import pytest
from tictactoe_engine.core import (
    Board,
    Mark,
    EDGE_CELLS,
    InvalidBoardError,
    NoLegalMovesError,
    apply_move,
    legal_moves,
    is_terminal,
)
from tictactoe_engine.solver import Difficulty, choose_move, weak_move
from tictactoe_engine.solver import policy


def test_difficulty_parse():
    """Tiers parse from names, case-insensitively."""
    assert Difficulty.parse("Hard") is Difficulty.HARD
    assert Difficulty.parse(" easy ") is Difficulty.EASY
    assert Difficulty.parse(Difficulty.MEDIUM) is Difficulty.MEDIUM
    assert Difficulty.parse(None) is Difficulty.HARD

    with pytest.raises(ValueError):
        Difficulty.parse("impossible")


@pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
def test_immediate_win_any_difficulty(x_can_win, difficulty):
    """Scenario: X X . / O O . -> 2 at every tier."""
    for seed in range(10):
        assert choose_move(x_can_win, Mark.X, Mark.O, difficulty, rng=random.Random(seed)) == 2


def test_hard_blocks(o_threatens):
    """Scenario: O O . / X . . -> hard blocks at 2."""
    assert choose_move(o_threatens, Mark.X, Mark.O, Difficulty.HARD) == 2


def test_hard_is_deterministic(empty_board, stub_random):
    """Hard never consults the random source."""
    rng = stub_random()
    assert choose_move(empty_board, Mark.X, Mark.O, "hard", rng=rng) == 0
    assert rng.calls == 0
    assert rng.offered == []


def test_default_difficulty_is_hard(empty_board, stub_random):
    """Omitting the tier plays optimally."""
    rng = stub_random()
    assert choose_move(empty_board, Mark.X, Mark.O, rng=rng) == 0
    assert rng.calls == 0


def test_medium_blocks_without_rolling(o_threatens, stub_random):
    """Win-or-block short-circuits before any roll."""
    rng = stub_random()
    assert choose_move(o_threatens, Mark.X, Mark.O, "medium", rng=rng) == 2
    assert rng.calls == 0


def test_medium_optimal_roll(empty_board, stub_random):
    """Roll under 0.75 plays the optimal move."""
    rng = stub_random(rolls=[0.5], pick_last=True)
    assert choose_move(empty_board, Mark.X, Mark.O, "medium", rng=rng) == 0
    assert rng.offered == []


def test_medium_random_roll(empty_board, stub_random):
    """Roll of 0.75 or more picks uniformly from all legal moves."""
    rng = stub_random(rolls=[0.75], pick_last=True)
    assert choose_move(empty_board, Mark.X, Mark.O, "medium", rng=rng) == 8
    assert rng.offered == [list(range(9))]


def test_easy_weak_move_prefers_edges(empty_board, stub_random):
    """Scenario: both 0.2 branches avoided -> an edge cell."""
    rng = stub_random(rolls=[0.99, 0.99])
    move = choose_move(empty_board, Mark.X, Mark.O, "easy", rng=rng)

    assert move in EDGE_CELLS
    assert rng.offered == [[1, 3, 5, 7]]
    assert rng.calls == 2


def test_easy_weak_move_only_free_edges(stub_random):
    """Occupied edges are not offered."""
    board = Board.from_string("XO..X....")
    rng = stub_random(pick_last=True)
    assert choose_move(board, Mark.O, Mark.X, "easy", rng=rng, always_take_win=False) in (3, 5, 7)
    assert rng.offered[-1] == [3, 5, 7]


def test_easy_without_edges_uses_any_legal(stub_random):
    """No free edge: choose among all legal cells."""
    # Edges taken, no immediate win for X
    board = Board.from_string(".X.O.X.O.")
    rng = stub_random()
    move = choose_move(board, Mark.X, Mark.O, "easy", rng=rng)

    assert rng.offered == [[0, 2, 4, 6, 8]]
    assert move == 0


def test_easy_optimal_roll(empty_board, stub_random):
    """Second roll under 0.2 plays optimally."""
    rng = stub_random(rolls=[0.99, 0.1])
    assert choose_move(empty_board, Mark.X, Mark.O, "easy", rng=rng) == 0
    assert rng.offered == []


def test_easy_win_roll_when_not_forced(x_can_win, stub_random):
    """With always_take_win off, the win needs the first roll."""
    rng = stub_random(rolls=[0.1])
    assert choose_move(x_can_win, Mark.X, Mark.O, "easy", rng=rng, always_take_win=False) == 2

    rng = stub_random(rolls=[0.99, 0.99])
    move = choose_move(x_can_win, Mark.X, Mark.O, "easy", rng=rng, always_take_win=False)
    assert move == 5
    assert rng.offered == [[5, 7]]


def test_weak_move_helper(stub_random):
    """weak_move falls back to all legal moves when edges are full."""
    board = Board.from_string(".X.X.X.X.")
    assert weak_move(board, stub_random(pick_last=True)) == 8


def test_fallback_when_policy_returns_none(empty_board, monkeypatch):
    """An unusable move is replaced by the lowest legal index."""
    monkeypatch.setattr(policy, "optimal_move", lambda board, me, opp: None)
    assert choose_move(empty_board, Mark.X, Mark.O, "hard") == 0


def test_fallback_when_policy_returns_occupied(monkeypatch):
    """An occupied cell from the solver is never returned."""
    board = Board.from_string("XO.......")
    monkeypatch.setattr(policy, "optimal_move", lambda board, me, opp: 0)
    assert choose_move(board, Mark.X, Mark.O, "hard") == 2


def test_full_board_rejected():
    """Choosing on a full board is a caller error."""
    with pytest.raises(NoLegalMovesError):
        choose_move(Board.from_string("XOXXOOOXX"), Mark.X, Mark.O)


def test_bad_inputs_rejected(empty_board):
    """Invalid boards and marks fail before any search."""
    with pytest.raises(InvalidBoardError):
        choose_move([None] * 8, Mark.X, Mark.O)
    with pytest.raises(ValueError):
        choose_move(empty_board, Mark.X, Mark.X)
    with pytest.raises(ValueError):
        choose_move(empty_board, "Q", Mark.X)
    with pytest.raises(ValueError):
        choose_move(empty_board, Mark.X, Mark.O, "nightmare")


def _reachable_boards(max_plies):
    """Boards reachable from empty in at most max_plies moves, X first."""
    frontier = [Board.empty()]
    seen = set(frontier)
    marks = (Mark.X, Mark.O)
    for ply in range(max_plies):
        nxt = []
        for board in frontier:
            if is_terminal(board):
                continue
            for move in legal_moves(board):
                child = apply_move(board, move, marks[ply % 2])
                if child not in seen:
                    seen.add(child)
                    nxt.append(child)
        frontier = nxt
    return seen


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_always_legal(difficulty):
    """Every tier returns a legal move on early reachable boards."""
    rng = random.Random(7)
    for board in _reachable_boards(2):
        if is_terminal(board):
            continue
        me = Mark.X if board.count(Mark.X) == board.count(Mark.O) else Mark.O
        opp = Mark.O if me == Mark.X else Mark.X
        move = choose_move(board, me, opp, difficulty, rng=rng)
        assert move in legal_moves(board)
