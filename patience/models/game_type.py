"""Game type definitions and catalog."""

from typing import Iterable

from pydantic import BaseModel, Field, model_validator

from .card import RANKS_PER_SUIT, SUIT_PALETTE

SPARE_CELLS = 2


class GameType(BaseModel, frozen=True):
    """Named layout configuration.

    Validation happens on construction, so a bad definition is rejected when
    the catalog (or config file) is loaded rather than during play.
    """

    name: str
    num_foundations: int = Field(gt=0)
    num_suits: int = Field(gt=0, le=len(SUIT_PALETTE))
    num_tableau_cards: int = Field(ge=0)
    tableau_col_sizes: tuple[int, ...]

    @model_validator(mode="after")
    def _check_layout(self) -> "GameType":
        if not self.tableau_col_sizes:
            raise ValueError("tableau_col_sizes must name at least one column")
        if any(size <= 0 for size in self.tableau_col_sizes):
            raise ValueError("tableau column sizes must be positive")
        if sum(self.tableau_col_sizes) != self.num_tableau_cards:
            raise ValueError(
                f"tableau_col_sizes sum to {sum(self.tableau_col_sizes)}, "
                f"expected {self.num_tableau_cards}"
            )
        if self.num_tableau_cards > self.deck_size:
            raise ValueError(
                f"tableau needs {self.num_tableau_cards} cards but the deck has {self.deck_size}"
            )
        if self.num_foundations % self.num_suits != 0:
            raise ValueError(
                f"{self.num_foundations} foundations cannot be split evenly over {self.num_suits} suits"
            )
        return self

    @property
    def deck_size(self) -> int:
        """Total number of cards in play."""
        return self.num_foundations * RANKS_PER_SUIT

    @property
    def column_count(self) -> int:
        """Number of tableau columns."""
        return len(self.tableau_col_sizes)

    @property
    def stock_size(self) -> int:
        """Cards left for the stock after the tableau and spare cells."""
        return max(0, self.deck_size - self.num_tableau_cards - SPARE_CELLS)

    def __str__(self) -> str:
        return self.name


DEFAULT_GAME_TYPES: tuple[GameType, ...] = (
    GameType(
        name="Easy",
        num_foundations=1,
        num_suits=1,
        num_tableau_cards=6,
        tableau_col_sizes=(1, 2, 3),
    ),
    GameType(
        name="Classic",
        num_foundations=4,
        num_suits=4,
        num_tableau_cards=28,
        tableau_col_sizes=(1, 2, 3, 4, 5, 6, 7),
    ),
    GameType(
        name="Double Deck",
        num_foundations=8,
        num_suits=4,
        num_tableau_cards=50,
        tableau_col_sizes=(5,) * 10,
    ),
    GameType(
        name="Two Suits",
        num_foundations=4,
        num_suits=2,
        num_tableau_cards=36,
        tableau_col_sizes=(6,) * 6,
    ),
    GameType(
        name="Five Suits",
        num_foundations=5,
        num_suits=5,
        num_tableau_cards=36,
        tableau_col_sizes=(1, 2, 3, 4, 5, 6, 7, 8),
    ),
)


class GameTypeCatalog:
    """Immutable table of selectable game types.

    Index 0 is the default; lookups outside the table fall back to it.
    """

    def __init__(self, game_types: Iterable[GameType]):
        """Initialize catalog.

        Args:
            game_types: Game types in menu order

        Raises:
            ValueError: If no game types are given
        """
        self._game_types: tuple[GameType, ...] = tuple(game_types)
        if not self._game_types:
            raise ValueError("Game type catalog cannot be empty")

    @property
    def valid_game_types(self) -> tuple[GameType, ...]:
        """All selectable variants, in menu order."""
        return self._game_types

    @property
    def default(self) -> GameType:
        """The fallback game type."""
        return self._game_types[0]

    def get_game_type(self, index: int) -> GameType:
        """Look up a game type by menu index, falling back to the default."""
        if 0 <= index < len(self._game_types):
            return self._game_types[index]
        return self.default

    def __len__(self) -> int:
        return len(self._game_types)

    def __iter__(self):
        return iter(self._game_types)


def default_catalog() -> GameTypeCatalog:
    """Build the catalog of built-in game types."""
    return GameTypeCatalog(DEFAULT_GAME_TYPES)
