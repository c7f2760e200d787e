"""Move validation."""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, assert_never

from patience.models.board import Board
from patience.models.card import (
    Card,
    Rank,
    ascending,
    is_foundation_run,
    is_run,
)
from patience.models.messages import (
    Move,
    MoveSpareToFoundation,
    MoveSpareToTableau,
    MoveStockToTableau,
    MoveTableauToFoundation,
    MoveTableauToTableau,
)


class RunOrientation(str, Enum):
    """How a run must be laid onto its destination."""

    AS_CLICKED = "as_clicked"
    REVERSED = "reversed"


@dataclass
class MoveCheck:
    """Result of move validation."""

    is_valid: bool
    error_message: str = ""
    orientation: RunOrientation = RunOrientation.AS_CLICKED

    @property
    def needs_reversal(self) -> bool:
        """Check if the run has to be reversed before it is appended."""
        return self.orientation == RunOrientation.REVERSED


def _reject(message: str) -> MoveCheck:
    return MoveCheck(is_valid=False, error_message=message)


def foundation_accepts(foundation: Sequence[Card], card: Card) -> bool:
    """Check if ``card`` is the next card for a foundation.

    An empty foundation takes any Ace; otherwise the card must follow the top
    card in the same suit.
    """
    if not foundation:
        return card.rank == Rank.ACE
    top = foundation[-1]
    return card.suit == top.suit and card.rank == top.rank + 1


class MoveValidator:
    """Checks moves against the current board without changing it."""

    def check(self, board: Board, move: Move) -> MoveCheck:
        """Validate any move message.

        Args:
            board: Current board
            move: Requested move

        Returns:
            MoveCheck
        """
        match move:
            case MoveTableauToTableau(run=run, from_col=from_col, to_col=to_col):
                return self.check_tableau_to_tableau(board, run, from_col, to_col)
            case MoveSpareToTableau(card=card, to_col=to_col):
                return self.check_spare_to_tableau(board, card, to_col)
            case MoveSpareToFoundation(card=card, to_foundation=index):
                return self.check_spare_to_foundation(board, card, index)
            case MoveTableauToFoundation(run=run, from_col=from_col, to_foundation=index):
                return self.check_tableau_to_foundation(board, run, from_col, index)
            case MoveStockToTableau():
                return self.check_stock_to_tableau(board)
            case _:
                assert_never(move)

    def check_tableau_to_tableau(
        self,
        board: Board,
        run: Sequence[Card],
        from_col: int,
        to_col: int,
    ) -> MoveCheck:
        """Validate moving a run between columns.

        The run may fit the destination in the order it was clicked or only
        when reversed; the result carries which orientation to use.

        Args:
            board: Current board
            run: Cards to move, bottom to top as they sit in the source
            from_col: Source column
            to_col: Destination column

        Returns:
            MoveCheck with the orientation to apply
        """
        if from_col == to_col:
            return _reject("Source and destination column are the same")
        if to_col not in board.tableau:
            return _reject(f"No tableau column {to_col}")
        if not board.is_top_slice(from_col, list(run)):
            return _reject("Run is not the top of its column")

        cards = board.column(from_col)[-len(run):]
        if not is_run(cards):
            return _reject("Cards do not form a run")

        top = board.top_of(to_col)
        if top is None:
            return MoveCheck(is_valid=True)
        if is_run([top, *cards]):
            return MoveCheck(is_valid=True)
        if is_run([top, *reversed(cards)]):
            return MoveCheck(is_valid=True, orientation=RunOrientation.REVERSED)
        return _reject(f"Run does not continue from {top}")

    def check_spare_to_tableau(self, board: Board, card: Card, to_col: int) -> MoveCheck:
        """Validate moving a spare card onto a column."""
        cell = board.spare_index(card.identity)
        if cell is None:
            return _reject("Card is not in a spare cell")
        if to_col not in board.tableau:
            return _reject(f"No tableau column {to_col}")
        top = board.top_of(to_col)
        if top is None or is_run([top, board.spare[cell]]):
            return MoveCheck(is_valid=True)
        return _reject(f"{board.spare[cell]} does not continue from {top}")

    def check_spare_to_foundation(self, board: Board, card: Card, to_foundation: int) -> MoveCheck:
        """Validate moving a spare card onto a foundation."""
        cell = board.spare_index(card.identity)
        if cell is None:
            return _reject("Card is not in a spare cell")
        if not 0 <= to_foundation < len(board.foundations):
            return _reject(f"No foundation {to_foundation}")
        if not foundation_accepts(board.foundations[to_foundation], board.spare[cell]):
            return _reject(f"Foundation {to_foundation} does not accept {board.spare[cell]}")
        return MoveCheck(is_valid=True)

    def check_tableau_to_foundation(
        self,
        board: Board,
        run: Sequence[Card],
        from_col: int,
        to_foundation: int,
    ) -> MoveCheck:
        """Validate moving a tableau run onto a foundation.

        The run is pushed lowest rank first, so its lowest card has to be the
        foundation's next card.
        """
        if not 0 <= to_foundation < len(board.foundations):
            return _reject(f"No foundation {to_foundation}")
        if not board.is_top_slice(from_col, list(run)):
            return _reject("Run is not the top of its column")

        cards = board.column(from_col)[-len(run):]
        if not is_foundation_run(cards):
            return _reject("Cards cannot go to a foundation together")
        lowest = ascending(cards)[0]
        if not foundation_accepts(board.foundations[to_foundation], lowest):
            return _reject(f"Foundation {to_foundation} does not accept {lowest}")
        return MoveCheck(is_valid=True)

    def check_stock_to_tableau(self, board: Board) -> MoveCheck:
        """Validate dealing from the stock."""
        if not board.stock:
            return _reject("Stock is empty")
        return MoveCheck(is_valid=True)
