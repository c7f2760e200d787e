"""Board state model."""

from typing import Iterator

from pydantic import BaseModel, Field

from .card import Card
from .game_type import SPARE_CELLS


def _empty_spare() -> list[Card | None]:
    return [None] * SPARE_CELLS


class Board(BaseModel):
    """All card zones of one game.

    Every card of the deck is listed in exactly one zone. Stacks are stored
    bottom to top; ``stock`` holds pre-partitioned groups, first group dealt
    first.
    """

    foundations: list[list[Card]] = Field(default_factory=list)
    tableau: dict[int, list[Card]] = Field(default_factory=dict)
    spare: list[Card | None] = Field(default_factory=_empty_spare)
    stock: list[list[Card]] = Field(default_factory=list)

    @property
    def column_count(self) -> int:
        """Number of tableau columns."""
        return len(self.tableau)

    def column(self, index: int) -> list[Card]:
        """Get a tableau column (empty list for unknown indices)."""
        return self.tableau.get(index, [])

    def top_of(self, index: int) -> Card | None:
        """Get the top card of a tableau column."""
        column = self.column(index)
        return column[-1] if column else None

    def foundation_top(self, index: int) -> Card | None:
        """Get the top card of a foundation."""
        foundation = self.foundations[index]
        return foundation[-1] if foundation else None

    def foundation_count(self) -> int:
        """Total number of cards on all foundations."""
        return sum(len(f) for f in self.foundations)

    def stock_count(self) -> int:
        """Number of cards still in stock."""
        return sum(len(g) for g in self.stock)

    def spare_index(self, identity: int) -> int | None:
        """Find the spare cell holding the card with this identity."""
        for i, card in enumerate(self.spare):
            if card is not None and card.identity == identity:
                return i
        return None

    def locate_in_tableau(self, identity: int) -> tuple[int, int] | None:
        """Find (column, row) of a card in the tableau."""
        for col, cards in self.tableau.items():
            for row, card in enumerate(cards):
                if card.identity == identity:
                    return col, row
        return None

    def run_from(self, identity: int) -> tuple[list[Card], int] | None:
        """Get the card with this identity and everything above it.

        Returns:
            (run, column) or None if the card is not in the tableau
        """
        found = self.locate_in_tableau(identity)
        if found is None:
            return None
        col, row = found
        return list(self.tableau[col][row:]), col

    def is_top_slice(self, col: int, run: list[Card]) -> bool:
        """Check if ``run`` is exactly the top of column ``col`` (by identity)."""
        column = self.column(col)
        if not run or len(run) > len(column):
            return False
        top = column[len(column) - len(run):]
        return [c.identity for c in top] == [c.identity for c in run]

    def iter_cards(self) -> Iterator[Card]:
        """Iterate over every card on the board, zone by zone."""
        for foundation in self.foundations:
            yield from foundation
        for col in sorted(self.tableau):
            yield from self.tableau[col]
        for card in self.spare:
            if card is not None:
                yield card
        for group in self.stock:
            yield from group

    def identities(self) -> list[int]:
        """Sorted identities of every card on the board."""
        return sorted(c.identity for c in self.iter_cards())

    def snapshot(self) -> "Board":
        """Deep copy used for undo history."""
        return self.model_copy(deep=True)
