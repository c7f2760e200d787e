"""Deck generation and initial board layout."""

from typing import Sequence

from patience.models.board import Board
from patience.models.card import SUIT_PALETTE, Card, Orientation, Rank
from patience.models.game_type import SPARE_CELLS, GameType


def deck(game_type: GameType) -> list[Card]:
    """Create the unshuffled deck for a game type.

    One logical deck of Ace..King is produced per foundation. Logical deck
    ``d`` uses suit ``palette[d % num_suits]``, so each suit in play appears
    ``num_foundations / num_suits`` times.

    Args:
        game_type: Layout to build the deck for

    Returns:
        Face-down cards with identities 1..N in order
    """
    suits = SUIT_PALETTE[: game_type.num_suits]
    cards: list[Card] = []
    identity = 1
    for d in range(game_type.num_foundations):
        suit = suits[d % len(suits)]
        for rank in Rank:
            cards.append(
                Card(
                    rank=rank,
                    suit=suit,
                    orientation=Orientation.FACE_DOWN,
                    identity=identity,
                )
            )
            identity += 1
    return cards


def group_stock(cards: Sequence[Card], column_count: int) -> list[list[Card]]:
    """Split stock cards into deal groups of one card per column.

    The final group is shorter when the stock does not divide evenly.
    """
    if column_count <= 0:
        return []
    return [
        [c.face_down() for c in cards[i : i + column_count]]
        for i in range(0, len(cards), column_count)
    ]


def board_from_deck(game_type: GameType, cards: Sequence[Card]) -> Board:
    """Lay out a (shuffled) deck as the initial board.

    The first ``num_tableau_cards`` cards fill the columns in order of
    ``tableau_col_sizes``; the next two go to the spare cells, left then
    right; the remainder becomes the stock. Each column shows only its top
    card.

    Args:
        game_type: Layout to deal
        cards: Cards in deal order

    Returns:
        Newly dealt board
    """
    tableau: dict[int, list[Card]] = {}
    pos = 0
    for col, size in enumerate(game_type.tableau_col_sizes):
        column = [c.face_down() for c in cards[pos : pos + size]]
        if column:
            column[-1] = column[-1].face_up()
        tableau[col] = column
        pos += size

    spare: list[Card | None] = [None] * SPARE_CELLS
    for cell in range(SPARE_CELLS):
        if pos < len(cards):
            spare[cell] = cards[pos].face_up()
            pos += 1

    return Board(
        foundations=[[] for _ in range(game_type.num_foundations)],
        tableau=tableau,
        spare=spare,
        stock=group_stock(cards[pos:], game_type.column_count),
    )
