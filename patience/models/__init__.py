"""Game models."""

from .board import Board
from .card import (
    Card,
    Orientation,
    Rank,
    Suit,
    is_foundation_run,
    is_run,
    selection_valid_foundation_move,
    selection_valid_tableau_move,
)
from .game_type import GameType, GameTypeCatalog, default_catalog
from .selection import NO_SELECTION, NoSelection, Selection, SpareSelection, TableauSelection

__all__ = [
    "Board",
    "Card",
    "Orientation",
    "Rank",
    "Suit",
    "is_foundation_run",
    "is_run",
    "selection_valid_foundation_move",
    "selection_valid_tableau_move",
    "GameType",
    "GameTypeCatalog",
    "default_catalog",
    "NO_SELECTION",
    "NoSelection",
    "Selection",
    "SpareSelection",
    "TableauSelection",
]
