"""
Rich-based terminal output for boards and match results.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..core import Board, Mark, get_game_result, render, winning_line
from ..solver import MatchSummary

console = Console()
logger = logging.getLogger(__name__)

MARK_STYLES = {
    Mark.X: "bold cyan",
    Mark.O: "bold magenta",
    Mark.CHECK: "bold green",
}


class GameDisplay:
    """
    Rich display for the CLI.

    Shows:
    - Board grid with the winning line highlighted
    - Chosen move
    - Self-play summaries
    """

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def log(self, message: str, style: str = ""):
        """Log a message using rich console."""
        self.console.print(message, style=style)

    def log_info(self, message: str):
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def log_success(self, message: str):
        self.console.print(f"[green]✓[/green] {message}")

    def log_error(self, message: str):
        self.console.print(f"[red]✗[/red] {message}")

    def show_header(self, title: str):
        self.console.rule(f"[bold blue]{title}[/bold blue]")

    def board_table(self, board: Board, highlight: Optional[int] = None) -> Table:
        """
        Build a 3x3 grid table.

        Empty cells show their index (dimmed) so a human can pick a move.
        """
        line = winning_line(board) or ()

        table = Table(show_header=False, show_lines=True, padding=(0, 1))
        for _ in range(3):
            table.add_column(justify="center", width=3)

        for r in range(3):
            row = []
            for c in range(3):
                i = r * 3 + c
                cell = board[i]
                if cell is None:
                    text = f"[dim]{i}[/dim]"
                else:
                    style = MARK_STYLES.get(cell, "bold")
                    if i in line:
                        style += " reverse"
                    text = f"[{style}]{cell.value}[/]"
                if i == highlight:
                    text = f"[bold yellow underline]{cell.value if cell else i}[/bold yellow underline]"
                row.append(text)
            table.add_row(*row)

        return table

    def show_board(self, board: Board, title: str = "Board", highlight: Optional[int] = None):
        """Print the board and its status."""
        status = get_game_result(board) or "In progress"
        self.console.print(
            Panel.fit(self.board_table(board, highlight), title=title, subtitle=status)
        )
        logger.debug("Board:\n" + render(board))

    def show_move(self, board: Board, move: int, mark: Mark):
        """Show the chosen move on the board."""
        self.show_board(board, title=f"{mark} plays {move}", highlight=move)

    def show_match_summary(self, summary: MatchSummary):
        """Show a self-play results table."""
        table = Table(title=f"Self-play ({summary.games} games)")
        table.add_column("Result", style="cyan")
        table.add_column("Games", justify="right")
        table.add_column("Share", justify="right")

        def _share(count: int) -> str:
            return f"{count / summary.games * 100:.1f}%" if summary.games else "-"

        table.add_row(f"X wins ({summary.first_difficulty})", str(summary.first_wins), _share(summary.first_wins))
        table.add_row(f"O wins ({summary.second_difficulty})", str(summary.second_wins), _share(summary.second_wins))
        table.add_row("Draws", str(summary.draws), _share(summary.draws))

        self.console.print(table)


def setup_rich_logging(level: str = "INFO", output: Optional[Console] = None) -> RichHandler:
    """
    Send all log records through the display console.

    Replaces any handlers already on the root logger so engine logs and
    board output share one stream.

    Returns:
        The installed handler
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
        console=output or console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger.addHandler(rich_handler)
    root_logger.setLevel(getattr(logging, level.upper()))
    return rich_handler
