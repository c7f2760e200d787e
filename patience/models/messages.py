"""Inbound messages consumed by the game session.

Each family is a closed set of variants discriminated on ``kind`` so a
message can be parsed from a plain dict (``MESSAGE_ADAPTER.validate_python``)
and dispatched with ``match``.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from .card import Card


class StartGame(BaseModel, frozen=True):
    """Begin a new game of the given catalog index."""

    kind: Literal["start_game"] = "start_game"
    game_type_index: int = 0


class DeckReady(BaseModel, frozen=True):
    """A shuffled deck has arrived from the shuffler."""

    kind: Literal["deck_ready"] = "deck_ready"
    cards: tuple[Card, ...]


class SelectSpare(BaseModel, frozen=True):
    """A spare card was clicked."""

    kind: Literal["select_spare"] = "select_spare"
    card: Card


class SelectTableau(BaseModel, frozen=True):
    """A tableau card was clicked."""

    kind: Literal["select_tableau"] = "select_tableau"
    card: Card


class ClearSelection(BaseModel, frozen=True):
    """Drop the current selection."""

    kind: Literal["clear_selection"] = "clear_selection"


class MoveTableauToTableau(BaseModel, frozen=True):
    """Move a run between tableau columns."""

    kind: Literal["tableau_to_tableau"] = "tableau_to_tableau"
    run: tuple[Card, ...]
    from_col: int
    to_col: int


class MoveSpareToTableau(BaseModel, frozen=True):
    """Move a spare card onto a tableau column."""

    kind: Literal["spare_to_tableau"] = "spare_to_tableau"
    card: Card
    to_col: int


class MoveSpareToFoundation(BaseModel, frozen=True):
    """Move a spare card onto a foundation."""

    kind: Literal["spare_to_foundation"] = "spare_to_foundation"
    card: Card
    to_foundation: int


class MoveTableauToFoundation(BaseModel, frozen=True):
    """Move a tableau run onto a foundation."""

    kind: Literal["tableau_to_foundation"] = "tableau_to_foundation"
    run: tuple[Card, ...]
    from_col: int
    to_foundation: int


class MoveStockToTableau(BaseModel, frozen=True):
    """Deal the next stock group, one card per column."""

    kind: Literal["stock_to_tableau"] = "stock_to_tableau"


class Undo(BaseModel, frozen=True):
    """Step back one move."""

    kind: Literal["undo"] = "undo"


class Restart(BaseModel, frozen=True):
    """Go back to the board as originally dealt."""

    kind: Literal["restart"] = "restart"


Move = Annotated[
    Union[
        MoveTableauToTableau,
        MoveSpareToTableau,
        MoveSpareToFoundation,
        MoveTableauToFoundation,
        MoveStockToTableau,
    ],
    Field(discriminator="kind"),
]

Message = Annotated[
    Union[
        StartGame,
        DeckReady,
        SelectSpare,
        SelectTableau,
        ClearSelection,
        MoveTableauToTableau,
        MoveSpareToTableau,
        MoveSpareToFoundation,
        MoveTableauToFoundation,
        MoveStockToTableau,
        Undo,
        Restart,
    ],
    Field(discriminator="kind"),
]

MESSAGE_ADAPTER = TypeAdapter(Message)


class ShuffleRequest(BaseModel, frozen=True):
    """Outbound request for the shuffler, answered with ``DeckReady``."""

    cards: tuple[Card, ...]
