"""Game logic."""

from .deck import board_from_deck, deck
from .engine import GameEngine
from .moves import apply_move
from .selection import FoundationTarget, SelectionMachine, TableauTarget
from .session import GameSession, Phase
from .shuffler import IdentityShuffler, RandomShuffler, Shuffler
from .validator import MoveCheck, MoveValidator, RunOrientation

__all__ = [
    "board_from_deck",
    "deck",
    "GameEngine",
    "apply_move",
    "FoundationTarget",
    "SelectionMachine",
    "TableauTarget",
    "GameSession",
    "Phase",
    "IdentityShuffler",
    "RandomShuffler",
    "Shuffler",
    "MoveCheck",
    "MoveValidator",
    "RunOrientation",
]
