"""Tests for the command-line interface."""

import json
import logging

import pytest
from rich.logging import RichHandler
from tictactoe_engine.cli import main as cli_main
from tictactoe_engine.cli.main import main, resolve_marks
from tictactoe_engine.core import Mark
from tictactoe_engine.proposers import MoveProposer


@pytest.fixture(autouse=True)
def local_backend(monkeypatch):
    """Keep the CLI off the network regardless of the caller's environment."""
    monkeypatch.setenv("AI_BACKEND", "local")
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("AI_DEFAULT_DIFFICULTY", raising=False)


def test_move_quiet(capsys):
    code = main(["move", "--board", "XX.OO....", "--me", "X", "--opp", "O", "--quiet"])
    assert code == 0
    assert capsys.readouterr().out.strip() == "2"


def test_move_infers_marks(capsys):
    code = main(["move", "--board", "OO.X.....", "--quiet"])
    assert code == 0
    assert capsys.readouterr().out.strip() == "2"


def test_move_rich_output(capsys):
    code = main(["move", "--board", "XX.OO....", "--difficulty", "hard"])
    assert code == 0
    assert "plays cell 2" in capsys.readouterr().out


def test_move_json(capsys):
    payload = {"board": ["X", "X", None, "O", "O", None, None, None, None], "aiMark": "X", "playerMark": "O"}
    code = main(["move", "--json", json.dumps(payload)])
    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"move": 2}


def test_move_json_error(capsys):
    code = main(["move", "--json", json.dumps({"board": [None] * 3})])
    assert code == 2
    assert json.loads(capsys.readouterr().out) == {"error": "Invalid board"}


def test_move_invalid_board(capsys):
    assert main(["move", "--board", "XO", "--quiet"]) == 2


def test_move_full_board(capsys):
    assert main(["move", "--board", "XOXXOOOXX"]) == 2


def test_show(capsys):
    assert main(["show", "--board", "XXXOO...."]) == 0
    assert "X wins" in capsys.readouterr().out


def test_selfplay(capsys):
    code = main(["selfplay", "--games", "2", "--first", "hard", "--second", "easy", "--seed", "1", "--no-progress"])
    assert code == 0
    assert "Self-play" in capsys.readouterr().out


def test_no_command(capsys):
    assert main([]) == 1


class ScriptedPrompt:
    """Replays canned answers in place of a rich prompt class."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def ask(self, prompt, **kwargs):
        self.prompts.append(prompt)
        return self.answers.pop(0)


class SequenceProposer(MoveProposer):
    """Proposes scripted cells and records the marks it was asked for."""

    name = "scripted"

    def __init__(self, moves):
        self.moves = list(moves)
        self.seen = []

    def propose(self, board, me, opp, difficulty=None):
        self.seen.append((me, opp))
        return self.moves.pop(0)


@pytest.fixture
def scripted_game(monkeypatch):
    """Install scripted cell answers, replay answers and engine moves."""

    def install(cells, engine_moves, again=(False,)):
        cell_prompt = ScriptedPrompt(cells)
        proposer = SequenceProposer(engine_moves)
        monkeypatch.setattr(cli_main, "IntPrompt", cell_prompt)
        monkeypatch.setattr(cli_main, "Confirm", ScriptedPrompt(again))
        monkeypatch.setattr(cli_main, "proposer_from_config", lambda config, rng=None: proposer)
        return cell_prompt, proposer

    return install


@pytest.mark.parametrize(
    "human,ai,expected",
    [
        ("X", "O", (Mark.X, Mark.O)),
        ("O", "O", (Mark.O, Mark.X)),
        ("X", "X", (Mark.X, Mark.O)),
        ("✓", "X", (Mark.CHECK, Mark.X)),
    ],
)
def test_resolve_marks(human, ai, expected):
    assert resolve_marks(human, ai) == expected


def test_play_rejects_illegal_cells(capsys, scripted_game):
    """Occupied and off-board cells are asked again; the human wins row 0."""
    cell_prompt, proposer = scripted_game(cells=[0, 0, 9, 1, 2], engine_moves=[3, 4])

    assert main(["play"]) == 0

    out = capsys.readouterr().out
    assert "Cell 0 is not available" in out
    assert "Cell 9 is not available" in out
    assert "X wins! You win." in out
    assert cell_prompt.answers == []
    assert proposer.seen == [(Mark.X, Mark.O), (Mark.X, Mark.O)]


def test_play_mark_clash_and_engine_fallback(capsys, scripted_game):
    """The engine's mark is swapped on a clash; its occupied picks become the lowest legal cell."""
    _, proposer = scripted_game(cells=[4, 8], engine_moves=[0, 0, 0])

    assert main(["play", "--mark", "O", "--ai-mark", "O", "--ai-first"]) == 0

    out = capsys.readouterr().out
    assert "the engine plays X" in out
    assert "X plays cell 1" in out
    assert "X wins! The engine wins." in out
    assert set(proposer.seen) == {(Mark.X, Mark.O)}


def test_play_again(capsys, scripted_game):
    scripted_game(cells=[0, 1, 2] * 2, engine_moves=[3, 4] * 2, again=(True, False))

    assert main(["play"]) == 0
    assert capsys.readouterr().out.count("You win.") == 2


def test_play_draw(capsys, scripted_game):
    # X: 0 1 5 6 7, O: 2 3 4 8
    scripted_game(cells=[0, 1, 5, 6, 7], engine_moves=[4, 2, 3, 8])

    assert main(["play"]) == 0
    out = capsys.readouterr().out
    assert "Draw!" in out
    assert "You win." not in out


def test_play_aborted_input(capsys, scripted_game, monkeypatch):
    class ClosedInput:
        def ask(self, prompt, **kwargs):
            raise EOFError

    scripted_game(cells=[], engine_moves=[])
    monkeypatch.setattr(cli_main, "IntPrompt", ClosedInput())

    assert main(["play"]) == 1
    assert "Game aborted" in capsys.readouterr().out


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_rich_logs(capsys, restore_root_logger):
    code = main(["--log-level", "INFO", "--rich-logs", "move", "--board", "XX.OO....", "--quiet"])

    assert code == 0
    assert any(isinstance(h, RichHandler) for h in restore_root_logger.handlers)
    assert restore_root_logger.level == logging.INFO
    out = capsys.readouterr().out
    assert "Using local move source" in out
