"""Formatters for game log output."""

from typing import Iterable

from patience.models.board import Board
from patience.models.card import Card, Rank, Suit

# Suit codes for log output
SUIT_CODES: dict[Suit, str] = {
    Suit.SPADE: "S",
    Suit.HEART: "H",
    Suit.DIAMOND: "D",
    Suit.CLUB: "C",
    Suit.STAR: "R",
}

# Rank codes for log output
RANK_CODES: dict[Rank, str] = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}


def format_card(card: Card) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.

    Returns:
        Formatted string (e.g., "SA" for Ace of spades). Face-down cards get
        a trailing "*" (e.g., "H10*").
    """
    code = f"{SUIT_CODES[card.suit]}{RANK_CODES[card.rank]}"
    if not card.is_face_up:
        code += "*"
    return code


def format_cards(cards: Iterable[Card | None]) -> str:
    """Format cards to a comma-separated string, bottom card first.

    Args:
        cards: Cards to format; None entries (empty spare cells) become "-".

    Returns:
        Comma-separated card strings (e.g., "SK,SQ,SJ").
        Empty string if no cards.
    """
    return ",".join("-" if c is None else format_card(c) for c in cards)


def format_board(board: Board) -> dict[str, object]:
    """Format every zone of a board.

    Args:
        board: Board to format.

    Returns:
        Dict with "foundations", "tableau", "spare" and "stock" entries.
    """
    return {
        "foundations": [format_cards(f) for f in board.foundations],
        "tableau": {str(col): format_cards(cards) for col, cards in sorted(board.tableau.items())},
        "spare": format_cards(board.spare),
        "stock": [format_cards(g) for g in board.stock],
    }
