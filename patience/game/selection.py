"""Click-driven selection state machine."""

import logging

from pydantic import BaseModel

from patience.models.board import Board
from patience.models.card import (
    Card,
    selection_valid_foundation_move,
    selection_valid_tableau_move,
)
from patience.models.messages import (
    Move,
    MoveSpareToFoundation,
    MoveSpareToTableau,
    MoveTableauToFoundation,
    MoveTableauToTableau,
)
from patience.models.selection import (
    NO_SELECTION,
    NoSelection,
    Selection,
    SpareSelection,
    TableauSelection,
)

logger = logging.getLogger(__name__)


class TableauTarget(BaseModel, frozen=True):
    """A tableau column clicked as a destination."""

    column: int


class FoundationTarget(BaseModel, frozen=True):
    """A foundation clicked as a destination."""

    index: int


Destination = TableauTarget | FoundationTarget


class SelectionMachine:
    """Computes the next selection from a click and the current board.

    The machine keeps no state of its own; callers hold the selection and
    pass it back in.
    """

    def select_spare(self, board: Board, selection: Selection, card: Card) -> Selection:
        """Handle a click on a spare card.

        Clicking the selected spare card toggles the selection off; clicking
        any other spare card selects it.
        """
        cell = board.spare_index(card.identity)
        if cell is None:
            return selection
        if isinstance(selection, SpareSelection) and selection.card.identity == card.identity:
            return NO_SELECTION
        return SpareSelection(card=board.spare[cell])

    def select_tableau(self, board: Board, selection: Selection, card: Card) -> Selection:
        """Handle a click on a tableau card.

        The candidate is the clicked card plus everything above it. It is
        selected only if it could be moved to a column or a foundation.
        """
        found = board.run_from(card.identity)
        if found is None:
            return selection
        run, column = found
        if selection_valid_tableau_move(run) or selection_valid_foundation_move(run):
            return TableauSelection(run=tuple(run), column=column)
        logger.debug(f"Ignoring click on {card}: not a movable run")
        return selection

    def clear(self) -> Selection:
        """Drop any selection."""
        return NO_SELECTION

    def move_for_destination(self, selection: Selection, destination: Destination) -> Move | None:
        """Turn the current selection plus a destination click into a move.

        Args:
            selection: Current selection
            destination: Clicked column or foundation

        Returns:
            Move message, or None when nothing is selected or the selection
            is being dropped back where it came from
        """
        match selection:
            case NoSelection():
                return None
            case SpareSelection(card=card):
                if isinstance(destination, TableauTarget):
                    return MoveSpareToTableau(card=card, to_col=destination.column)
                return MoveSpareToFoundation(card=card, to_foundation=destination.index)
            case TableauSelection(run=run, column=column):
                if isinstance(destination, TableauTarget):
                    if destination.column == column:
                        return None
                    return MoveTableauToTableau(run=run, from_col=column, to_col=destination.column)
                return MoveTableauToFoundation(run=run, from_col=column, to_foundation=destination.index)
        return None
