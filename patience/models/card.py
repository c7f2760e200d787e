"""Card model and run predicates."""

from enum import Enum, IntEnum
from typing import Sequence

from pydantic import BaseModel


class Rank(IntEnum):
    """Card rank, Ace low through King high."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


class Suit(IntEnum):
    """Suit palette. A game type plays with a prefix of this palette."""

    SPADE = 0
    HEART = 1
    DIAMOND = 2
    CLUB = 3
    STAR = 4


class Orientation(str, Enum):
    """Which side of the card is showing."""

    FACE_UP = "up"
    FACE_DOWN = "down"


RANKS_PER_SUIT = len(Rank)
SUIT_PALETTE: tuple[Suit, ...] = tuple(Suit)

RANK_NAMES = {
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

SUIT_SYMBOLS = {
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
    Suit.STAR: "★",
}


class Card(BaseModel, frozen=True):
    """Single card.

    ``identity`` is assigned when the deck is generated and stays with the card
    for the whole game, so two cards of equal rank and suit (multi-deck games)
    can still be told apart.
    """

    rank: Rank
    suit: Suit
    orientation: Orientation = Orientation.FACE_DOWN
    identity: int

    @property
    def is_face_up(self) -> bool:
        """Check if the card is showing its face."""
        return self.orientation == Orientation.FACE_UP

    def face_up(self) -> "Card":
        """Return this card turned face up."""
        if self.is_face_up:
            return self
        return self.model_copy(update={"orientation": Orientation.FACE_UP})

    def face_down(self) -> "Card":
        """Return this card turned face down."""
        if not self.is_face_up:
            return self
        return self.model_copy(update={"orientation": Orientation.FACE_DOWN})

    def __str__(self) -> str:
        if not self.is_face_up:
            return "--"
        return f"{RANK_NAMES[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def __repr__(self) -> str:
        return f"Card({self}#{self.identity})"


def _step(lower: Card, upper: Card) -> int:
    """Rank step from ``lower`` to ``upper`` (0 when they cannot chain)."""
    if lower.suit != upper.suit:
        return 0
    diff = int(upper.rank) - int(lower.rank)
    if diff in (1, -1):
        return diff
    return 0


def is_run(cards: Sequence[Card]) -> bool:
    """Check if cards form a movable run.

    A run is a non-empty face-up sequence of one suit whose ranks change by
    exactly one between neighbours, all in the same direction.
    """
    if not cards:
        return False
    if not all(c.is_face_up for c in cards):
        return False
    direction = 0
    for lower, upper in zip(cards, cards[1:]):
        step = _step(lower, upper)
        if step == 0:
            return False
        if direction == 0:
            direction = step
        elif step != direction:
            return False
    return True


def selection_valid_tableau_move(run: Sequence[Card]) -> bool:
    """Check if a top-of-column slice may be picked up for a tableau move."""
    return is_run(run)


def selection_valid_foundation_move(run: Sequence[Card]) -> bool:
    """Check if a top-of-column slice may be picked up for a foundation move.

    A single face-up card always qualifies; a longer slice qualifies as a
    matched set, every card face up and of the same rank.
    """
    if not run or not all(c.is_face_up for c in run):
        return False
    return all(c.rank == run[0].rank for c in run)


def is_foundation_run(run: Sequence[Card]) -> bool:
    """Check if a slice can be pushed onto one foundation, lowest rank first.

    That is a single face-up card or a run of one suit.
    """
    if len(run) == 1:
        return run[0].is_face_up
    return is_run(run)


def ascending(cards: Sequence[Card]) -> list[Card]:
    """Return cards sorted Ace first."""
    return sorted(cards, key=lambda c: c.rank)
