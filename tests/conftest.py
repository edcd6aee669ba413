"""Shared fixtures for engine tests."""

import pytest

from tictactoe_engine.core import Board


class StubRandom:
    """
    Scripted stand-in for random.Random.

    random() returns queued rolls, then `default`. choice() records the
    sequence it was offered and returns its first (or last) element.
    """

    def __init__(self, rolls=(), default=0.99, pick_last=False):
        self.rolls = list(rolls)
        self.default = default
        self.pick_last = pick_last
        self.offered = []
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.rolls.pop(0) if self.rolls else self.default

    def choice(self, seq):
        seq = list(seq)
        self.offered.append(seq)
        return seq[-1] if self.pick_last else seq[0]


@pytest.fixture
def stub_random():
    return StubRandom


@pytest.fixture
def empty_board():
    return Board.empty()


@pytest.fixture
def x_can_win():
    """X X . / O O . / . . . with X to move."""
    return Board.from_string("XX.OO....")


@pytest.fixture
def o_threatens():
    """O O . / X . . / . . . with X to move and no X win."""
    return Board.from_string("OO.X.....")
