"""Move execution.

Executors assume the move already passed ``MoveValidator`` and mutate the
board in place. Each returns the number of cards transferred.
"""

from typing import assert_never

from patience.models.board import Board
from patience.models.card import Card, ascending
from patience.models.messages import (
    Move,
    MoveSpareToFoundation,
    MoveSpareToTableau,
    MoveStockToTableau,
    MoveTableauToFoundation,
    MoveTableauToTableau,
)

from .validator import MoveCheck, RunOrientation


def _reveal_top(board: Board, col: int) -> None:
    column = board.tableau[col]
    if column and not column[-1].is_face_up:
        column[-1] = column[-1].face_up()


def _take_from_column(board: Board, col: int, count: int) -> list[Card]:
    """Remove the top ``count`` cards of a column and expose the new top."""
    column = board.tableau[col]
    split = len(column) - count
    taken = column[split:]
    board.tableau[col] = column[:split]
    _reveal_top(board, col)
    return taken


def _take_from_spare(board: Board, card: Card) -> Card:
    cell = board.spare_index(card.identity)
    if cell is None:
        raise ValueError(f"{card!r} is not in a spare cell")
    taken = board.spare[cell]
    board.spare[cell] = None
    return taken


def move_tableau_to_tableau(
    board: Board,
    run_length: int,
    from_col: int,
    to_col: int,
    orientation: RunOrientation = RunOrientation.AS_CLICKED,
) -> int:
    cards = _take_from_column(board, from_col, run_length)
    if orientation == RunOrientation.REVERSED:
        cards.reverse()
    board.tableau[to_col].extend(c.face_up() for c in cards)
    return len(cards)


def move_spare_to_tableau(board: Board, card: Card, to_col: int) -> int:
    taken = _take_from_spare(board, card)
    board.tableau[to_col].append(taken.face_up())
    return 1


def move_spare_to_foundation(board: Board, card: Card, to_foundation: int) -> int:
    taken = _take_from_spare(board, card)
    board.foundations[to_foundation].append(taken.face_up())
    return 1


def move_tableau_to_foundation(board: Board, run_length: int, from_col: int, to_foundation: int) -> int:
    cards = _take_from_column(board, from_col, run_length)
    board.foundations[to_foundation].extend(c.face_up() for c in ascending(cards))
    return len(cards)


def deal_stock(board: Board) -> int:
    """Deal the first stock group, one face-up card per column in index order."""
    if not board.stock:
        return 0
    group = board.stock.pop(0)
    for col, card in zip(sorted(board.tableau), group):
        board.tableau[col].append(card.face_up())
    return len(group)


def apply_move(board: Board, move: Move, check: MoveCheck) -> int:
    """Execute a validated move.

    Args:
        board: Board to mutate
        move: Move message
        check: Passing result of ``MoveValidator.check`` for this move

    Returns:
        Number of cards transferred
    """
    match move:
        case MoveTableauToTableau(run=run, from_col=from_col, to_col=to_col):
            return move_tableau_to_tableau(board, len(run), from_col, to_col, check.orientation)
        case MoveSpareToTableau(card=card, to_col=to_col):
            return move_spare_to_tableau(board, card, to_col)
        case MoveSpareToFoundation(card=card, to_foundation=index):
            return move_spare_to_foundation(board, card, index)
        case MoveTableauToFoundation(run=run, from_col=from_col, to_foundation=index):
            return move_tableau_to_foundation(board, len(run), from_col, index)
        case MoveStockToTableau():
            return deal_stock(board)
        case _:
            assert_never(move)
