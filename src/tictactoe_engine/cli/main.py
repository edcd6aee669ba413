"""
Main CLI for the tic-tac-toe engine.
"""

import argparse
import json
import logging
import random
import sys
from typing import Tuple

from dotenv import load_dotenv
from rich.prompt import Confirm, IntPrompt

from ..config import EngineConfig
from ..core import (
    Board,
    EngineError,
    Mark,
    apply_move,
    create_empty_board,
    get_game_result,
    is_legal_move,
    is_terminal,
    legal_moves,
    next_to_move,
    winner,
)
from ..proposers import MoveProposer, proposer_from_config, select_move
from ..service import handle_move_request
from ..solver import Difficulty, run_matches
from ..utils.rich_display import GameDisplay, setup_rich_logging

EXIT_INPUT_ERROR = 2


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _configure_logging(args) -> None:
    """Plain or rich logging, as chosen on the command line."""
    if getattr(args, "rich_logs", False):
        setup_rich_logging(args.log_level)
    else:
        setup_logging(args.log_level)


def _load_config(args) -> EngineConfig:
    """Environment config with command-line overrides applied."""
    config = EngineConfig.from_env()
    if getattr(args, "backend", None):
        config.backend = args.backend
    return config


def _rng(args):
    return random.Random(args.seed) if getattr(args, "seed", None) is not None else None


def move_command(args) -> int:
    """Choose a move for a board."""
    _configure_logging(args)
    logger = logging.getLogger(__name__)
    display = GameDisplay()

    config = _load_config(args)
    proposer = proposer_from_config(config, rng=_rng(args))
    logger.info(f"Using {proposer.name} move source")

    if args.json:
        try:
            payload = json.loads(sys.stdin.read() if args.json == "-" else args.json)
        except ValueError as e:
            display.log_error(f"Request is not valid JSON: {e}")
            return EXIT_INPUT_ERROR
        response = handle_move_request(payload, proposer, config.default_difficulty)
        print(json.dumps(response))
        return 0 if "error" not in response else EXIT_INPUT_ERROR

    try:
        board = Board.from_string(args.board)
        me = Mark.parse(args.me) if args.me else next_to_move(board)
        opp = Mark.parse(args.opp) if args.opp else (Mark.O if me == Mark.X else Mark.X)
        difficulty = Difficulty.parse(args.difficulty or config.default_difficulty)

        if not legal_moves(board):
            display.log_error(f"No moves left: {get_game_result(board)}")
            return EXIT_INPUT_ERROR

        move = select_move(proposer, board, me, opp, difficulty)
    except (EngineError, ValueError) as e:
        display.log_error(str(e))
        return EXIT_INPUT_ERROR

    if args.quiet:
        print(move)
    else:
        display.show_move(board, move, me)
        display.log_success(f"{me} ({difficulty}) plays cell {move}")
    return 0


def show_command(args) -> int:
    """Render a board and its status."""
    _configure_logging(args)
    display = GameDisplay()

    try:
        board = Board.from_string(args.board)
    except EngineError as e:
        display.log_error(str(e))
        return EXIT_INPUT_ERROR

    display.show_board(board)
    if legal_moves(board) and get_game_result(board) is None:
        display.log_info(f"{next_to_move(board)} to move, legal cells: {legal_moves(board)}")
    return 0


def selfplay_command(args) -> int:
    """Play engine-vs-engine games."""
    _configure_logging(args)
    display = GameDisplay()

    display.show_header(f"Self-play: {args.first} (X) vs {args.second} (O)")
    summary = run_matches(
        args.games,
        args.first,
        args.second,
        rng=_rng(args),
        progress=not args.no_progress,
    )
    display.show_match_summary(summary)
    return 0


def resolve_marks(human, ai) -> Tuple[Mark, Mark]:
    """Parse both marks; on a clash the engine takes the first other symbol."""
    human = Mark.parse(human)
    ai = Mark.parse(ai)
    if ai == human:
        ai = next(m for m in Mark if m != human)
    return human, ai


def _ask_cell(display: GameDisplay, board: Board) -> int:
    """Prompt until the human names an empty cell."""
    while True:
        cell = IntPrompt.ask("Your move (0-8)", console=display.console)
        if is_legal_move(board, cell):
            return cell
        display.log_error(f"Cell {cell} is not available, choose from {legal_moves(board)}")


def play_round(
    display: GameDisplay,
    proposer: MoveProposer,
    human: Mark,
    ai: Mark,
    difficulty: Difficulty,
    ai_first: bool = False,
) -> Board:
    """
    Play one game of human against engine.

    Returns:
        The final board
    """
    logger = logging.getLogger(__name__)
    board = create_empty_board()
    turn = ai if ai_first else human

    while not is_terminal(board):
        if turn == human:
            display.show_board(board, title=f"You are {human}")
            board = apply_move(board, _ask_cell(display, board), human)
            turn = ai
        else:
            move = select_move(proposer, board, ai, human, difficulty)
            logger.debug(f"{proposer.name} answered {move}")
            board = apply_move(board, move, ai)
            display.log_info(f"{ai} plays cell {move}")
            turn = human

    display.show_board(board, title="Final")
    result = get_game_result(board)
    won = winner(board)
    if won == human:
        display.log_success(f"{result}! You win.")
    elif won == ai:
        display.log_error(f"{result}! The engine wins.")
    else:
        display.log_info(f"{result}!")
    return board


def play_command(args) -> int:
    """Play against the engine in the terminal."""
    _configure_logging(args)
    logger = logging.getLogger(__name__)
    display = GameDisplay()

    config = _load_config(args)
    human, ai = resolve_marks(args.mark, args.ai_mark)
    if ai.value != args.ai_mark:
        display.log_info(f"Both sides picked {human}, the engine plays {ai}")
    difficulty = Difficulty.parse(args.difficulty or config.default_difficulty)

    proposer = proposer_from_config(config, rng=_rng(args))
    logger.info(f"Using {proposer.name} move source")
    display.show_header(f"You ({human}) vs engine ({ai}, {difficulty})")

    try:
        while True:
            play_round(display, proposer, human, ai, difficulty, ai_first=args.ai_first)
            if not Confirm.ask("Play again?", default=False, console=display.console):
                return 0
    except (KeyboardInterrupt, EOFError):
        display.log_info("Game aborted")
        return 1


def main(argv=None) -> int:
    """Main entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(description="Tic-tac-toe move engine")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument(
        "--rich-logs", action="store_true", help="Render log records through rich"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    difficulties = [d.value for d in Difficulty]

    # Move command
    move_parser = subparsers.add_parser("move", help="Choose a move for a board")
    move_parser.add_argument(
        "--board", default="." * 9, help="Board as 9 characters, row-major ('.' = empty)"
    )
    move_parser.add_argument("--me", help="Mark to move (default: inferred, X first)")
    move_parser.add_argument("--opp", help="Opponent mark (default: the other of X/O)")
    move_parser.add_argument(
        "--difficulty", choices=difficulties, default=None, help="Difficulty tier"
    )
    move_parser.add_argument(
        "--backend", choices=["local", "llm"], default=None, help="Move source (overrides AI_BACKEND)"
    )
    move_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    move_parser.add_argument(
        "--json", default=None, help="JSON request payload, or '-' to read it from stdin"
    )
    move_parser.add_argument("--quiet", action="store_true", help="Print only the move index")
    move_parser.set_defaults(func=move_command)

    # Show command
    show_parser = subparsers.add_parser("show", help="Render a board")
    show_parser.add_argument("--board", required=True, help="Board as 9 characters")
    show_parser.set_defaults(func=show_command)

    # Self-play command
    selfplay_parser = subparsers.add_parser("selfplay", help="Play engine-vs-engine games")
    selfplay_parser.add_argument("--games", type=int, default=100, help="Number of games")
    selfplay_parser.add_argument("--first", choices=difficulties, default="hard", help="Tier for X")
    selfplay_parser.add_argument("--second", choices=difficulties, default="hard", help="Tier for O")
    selfplay_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    selfplay_parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    selfplay_parser.set_defaults(func=selfplay_command)

    # Play command
    marks = [m.value for m in Mark]
    play_parser = subparsers.add_parser("play", help="Play against the engine")
    play_parser.add_argument("--mark", choices=marks, default="X", help="Your mark")
    play_parser.add_argument(
        "--ai-mark", choices=marks, default="O", help="Engine mark (swapped if it matches yours)"
    )
    play_parser.add_argument(
        "--difficulty", choices=difficulties, default=None, help="Difficulty tier"
    )
    play_parser.add_argument(
        "--backend", choices=["local", "llm"], default=None, help="Move source (overrides AI_BACKEND)"
    )
    play_parser.add_argument("--ai-first", action="store_true", help="Let the engine open")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.set_defaults(func=play_command)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
