"""Game session: board, selection, undo history and game phase."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Sequence, assert_never

from patience.models.board import Board
from patience.models.card import Card, Rank, Suit
from patience.models.game_type import GameType, GameTypeCatalog
from patience.models.messages import (
    ClearSelection,
    DeckReady,
    Message,
    Move,
    MoveSpareToFoundation,
    MoveSpareToTableau,
    MoveStockToTableau,
    MoveTableauToFoundation,
    MoveTableauToTableau,
    Restart,
    SelectSpare,
    SelectTableau,
    ShuffleRequest,
    StartGame,
    Undo,
)
from patience.models.selection import NO_SELECTION, Selection

from .deck import board_from_deck, deck
from .moves import apply_move
from .selection import SelectionMachine
from .validator import MoveValidator

logger = logging.getLogger(__name__)


def _deck_key(cards: Sequence[Card]) -> list[tuple[int, Rank, Suit]]:
    """Cards of a deck by identity, ignoring order and orientation."""
    return sorted((c.identity, c.rank, c.suit) for c in cards)


class Phase(str, Enum):
    """Lifecycle of a game."""

    NEW_GAME = "new_game"  # waiting for the shuffled deck
    PLAYING = "playing"
    GAME_OVER = "game_over"  # every card is on a foundation


class GameSession:
    """State of the game in progress and the transitions between states.

    Messages are handled one at a time by ``update``. Invalid moves are
    rejected silently: board, move count, history and phase stay as they
    were.
    """

    def __init__(
        self,
        catalog: GameTypeCatalog,
        game_type_index: int = 0,
        validator: MoveValidator | None = None,
        selection_machine: SelectionMachine | None = None,
    ):
        """Initialize session.

        Args:
            catalog: Game types selectable with ``StartGame``
            game_type_index: Initial game type (catalog index)
            validator: MoveValidator instance (creates one if not provided)
            selection_machine: SelectionMachine instance (creates one if not provided)
        """
        self.catalog = catalog
        self.validator = validator or MoveValidator()
        self.selection_machine = selection_machine or SelectionMachine()

        self._on_move: Callable[[Move, int], None] | None = None
        self._on_game_over: Callable[[GameSession], None] | None = None

        self._reset(catalog.get_game_type(game_type_index))

    def _reset(self, game_type: GameType) -> None:
        self.game_type = game_type
        self.board = Board()
        self.selection: Selection = NO_SELECTION
        self.move_count = 0
        self.undo_history: list[Board] = []  # most recent first
        self.undo_used = False
        self.phase = Phase.NEW_GAME

    def set_callbacks(
        self,
        on_move: Callable[[Move, int], None] | None = None,
        on_game_over: Callable[[GameSession], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_move: Called after each successful move (move, cards transferred)
            on_game_over: Called once when the last card reaches a foundation
        """
        self._on_move = on_move
        self._on_game_over = on_game_over

    def update(self, message: Message) -> ShuffleRequest | None:
        """Handle one inbound message.

        Returns:
            A ShuffleRequest after ``StartGame``; None otherwise
        """
        match message:
            case StartGame(game_type_index=index):
                return self.start_game(index)
            case DeckReady(cards=cards):
                self.deck_ready(cards)
            case SelectSpare(card=card):
                if self.phase == Phase.PLAYING:
                    self.selection = self.selection_machine.select_spare(self.board, self.selection, card)
            case SelectTableau(card=card):
                if self.phase == Phase.PLAYING:
                    self.selection = self.selection_machine.select_tableau(self.board, self.selection, card)
            case ClearSelection():
                self.selection = self.selection_machine.clear()
            case (
                MoveTableauToTableau()
                | MoveSpareToTableau()
                | MoveSpareToFoundation()
                | MoveTableauToFoundation()
                | MoveStockToTableau()
            ):
                self.apply(message)
            case Undo():
                self.undo()
            case Restart():
                self.restart()
            case _:
                assert_never(message)
        return None

    def start_game(self, game_type_index: int) -> ShuffleRequest:
        """Replace the session with a fresh game and request a shuffled deck."""
        self._reset(self.catalog.get_game_type(game_type_index))
        logger.info(f"Starting new game: {self.game_type.name}")
        return ShuffleRequest(cards=tuple(deck(self.game_type)))

    def deck_ready(self, cards: Sequence[Card]) -> bool:
        """Lay out the shuffled deck and begin play.

        Returns:
            True if the deck was accepted
        """
        if self.phase != Phase.NEW_GAME:
            logger.warning("Ignoring deck: game already dealt")
            return False
        if len(cards) != self.game_type.deck_size:
            logger.warning(
                f"Ignoring deck of {len(cards)} cards, {self.game_type.name} needs {self.game_type.deck_size}"
            )
            return False
        if _deck_key(cards) != _deck_key(deck(self.game_type)):
            logger.warning(f"Ignoring deck: cards do not match the {self.game_type.name} deck")
            return False
        self.board = board_from_deck(self.game_type, cards)
        self.phase = Phase.PLAYING
        logger.debug(f"Dealt {self.game_type.name}: {self.board.stock_count()} cards in stock")
        return True

    def apply(self, move: Move) -> bool:
        """Validate and execute a move.

        Returns:
            True if the move was made
        """
        if self.phase != Phase.PLAYING:
            return False

        check = self.validator.check(self.board, move)
        if not check.is_valid:
            logger.debug(f"Rejected {move.kind}: {check.error_message}")
            return False

        previous = self.board.snapshot()
        transferred = apply_move(self.board, move, check)
        self.undo_history.insert(0, previous)
        self.move_count += transferred
        self.selection = NO_SELECTION
        logger.debug(f"{move.kind}: {transferred} card(s), move count {self.move_count}")

        if self._on_move:
            self._on_move(move, transferred)

        if self.is_complete():
            self.phase = Phase.GAME_OVER
            logger.info(f"Game over after {self.move_count} moves")
            if self._on_game_over:
                self._on_game_over(self)
        return True

    def undo(self) -> bool:
        """Restore the board from before the last move.

        Returns:
            True if there was a move to undo
        """
        if self.phase != Phase.PLAYING or not self.undo_history:
            return False
        self.board = self.undo_history.pop(0)
        self.selection = NO_SELECTION
        self.undo_used = True
        return True

    def restart(self) -> bool:
        """Restore the board as originally dealt and clear the history.

        Returns:
            True if any move had been made
        """
        if self.phase != Phase.PLAYING or not self.undo_history:
            return False
        self.board = self.undo_history[-1]
        self.undo_history.clear()
        self.selection = NO_SELECTION
        self.undo_used = True
        return True

    def is_complete(self) -> bool:
        """Check if every card of the deck is on a foundation."""
        return self.board.foundation_count() == self.game_type.deck_size

    def progress(self) -> int:
        """Percentage of the deck already on the foundations (0-100)."""
        return round(100 * self.board.foundation_count() / self.game_type.deck_size)

    @property
    def is_over(self) -> bool:
        """Check if the game has been won."""
        return self.phase == Phase.GAME_OVER

    def __str__(self) -> str:
        return (
            f"{self.game_type.name} [{self.phase.value}] "
            f"moves={self.move_count} progress={self.progress()}%"
        )
