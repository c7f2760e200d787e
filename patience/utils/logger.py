"""Logging utilities and board display."""

import logging
import sys
from typing import TYPE_CHECKING

from patience.models.card import Card

if TYPE_CHECKING:
    from patience.game.session import GameSession
    from patience.models.board import Board
    from patience.models.game_type import GameTypeCatalog


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


CELL_WIDTH = 5


class BoardDisplay:
    """Display the board to stdout."""

    def __init__(self, show_hidden: bool = False):
        """Initialize display.

        Args:
            show_hidden: Whether to print the value of face-down cards
        """
        self.show_hidden = show_hidden

    def card_text(self, card: Card | None) -> str:
        """Text for one card slot."""
        if card is None:
            return "[ ]"
        if not card.is_face_up and self.show_hidden:
            return f"({card.face_up()})"
        return str(card)

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def print_catalog(self, catalog: "GameTypeCatalog") -> None:
        """Print selectable game types."""
        for index, game_type in enumerate(catalog.valid_game_types):
            print(
                f"  {index}: {game_type.name} "
                f"({game_type.num_foundations} foundations, {game_type.num_suits} suits, "
                f"{game_type.column_count} columns)"
            )

    def board_lines(self, board: "Board") -> list[str]:
        """Render the board as text lines."""
        lines = []
        foundations = "  ".join(
            self.card_text(board.foundation_top(i)) for i in range(len(board.foundations))
        )
        lines.append(f"Foundations: {foundations}")
        spare = "  ".join(self.card_text(c) for c in board.spare)
        lines.append(f"Spare: L {spare} R    Stock: {len(board.stock)} deal(s) left")

        columns = [board.tableau[c] for c in sorted(board.tableau)]
        lines.append("    " + "".join(f"{c:<{CELL_WIDTH}}" for c in range(len(columns))))
        height = max((len(c) for c in columns), default=0)
        for row in range(height):
            cells = []
            for column in columns:
                cells.append(self.card_text(column[row]) if row < len(column) else "")
            lines.append(f"{row:>2}: " + "".join(f"{c:<{CELL_WIDTH}}" for c in cells).rstrip())
        return lines

    def print_session(self, session: "GameSession") -> None:
        """Print board plus game status."""
        self.print_separator()
        print(session)
        for line in self.board_lines(session.board):
            print(line)
        if session.undo_used:
            print("(undo used)")
