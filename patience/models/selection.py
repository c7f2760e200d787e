"""Selection state variants."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .card import Card


class NoSelection(BaseModel, frozen=True):
    """Nothing is selected."""

    kind: Literal["none"] = "none"


class SpareSelection(BaseModel, frozen=True):
    """A card in one of the spare cells is selected."""

    kind: Literal["spare"] = "spare"
    card: Card


class TableauSelection(BaseModel, frozen=True):
    """A run taken from the top of a tableau column is selected."""

    kind: Literal["tableau"] = "tableau"
    run: tuple[Card, ...]
    column: int


Selection = Annotated[
    Union[NoSelection, SpareSelection, TableauSelection],
    Field(discriminator="kind"),
]

NO_SELECTION = NoSelection()
