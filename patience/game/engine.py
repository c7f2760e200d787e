"""Game engine: runs a session against a shuffler and the event log."""

from __future__ import annotations

import logging

from patience.config import Config
from patience.logging import GameLogger
from patience.models.messages import DeckReady, Message, Move, Restart, StartGame, Undo

from .session import GameSession, Phase
from .shuffler import RandomShuffler, Shuffler

logger = logging.getLogger(__name__)


class GameEngine:
    """Feeds messages to a GameSession and fulfils its shuffle requests."""

    def __init__(
        self,
        config: Config | None = None,
        shuffler: Shuffler | None = None,
        game_logger: GameLogger | None = None,
    ):
        """Initialize game engine.

        Args:
            config: Configuration (uses defaults if not provided)
            shuffler: Deck shuffler (seeded from config if not provided)
            game_logger: GameLogger instance for the replay log
        """
        self.config = config or Config()
        self.catalog = self.config.build_catalog()
        self.shuffler = shuffler or RandomShuffler(self.config.game.seed)
        self.game_logger = game_logger

        self.session = GameSession(self.catalog, self.config.game.game_type_index)
        self.session.set_callbacks(on_move=self._log_move, on_game_over=self._log_game_over)
        self.games_started = 0

    def new_game(self, game_type_index: int | None = None) -> GameSession:
        """Start a game and deal it.

        Args:
            game_type_index: Catalog index (uses config if not specified)

        Returns:
            The session, in the PLAYING phase
        """
        if game_type_index is None:
            game_type_index = self.config.game.game_type_index
        self.dispatch(StartGame(game_type_index=game_type_index))
        return self.session

    def dispatch(self, message: Message) -> None:
        """Handle one message, answering a shuffle request with the dealt deck."""
        history_before = len(self.session.undo_history)

        request = self.session.update(message)
        if request is not None:
            shuffled = self.shuffler.shuffle(request.cards)
            self.session.update(DeckReady(cards=tuple(shuffled)))
            if self.session.phase == Phase.PLAYING:
                self.games_started += 1
                if self.game_logger:
                    self.game_logger.log_game_start(self.games_started, self.session)
            return

        if isinstance(message, (Undo, Restart)) and len(self.session.undo_history) < history_before:
            if self.game_logger:
                self.game_logger.log_history(self.games_started, message.kind, self.session)

    def _log_move(self, move: Move, transferred: int) -> None:
        if self.game_logger:
            self.game_logger.log_move(self.games_started, move, transferred, self.session)

    def _log_game_over(self, session: GameSession) -> None:
        logger.info(f"Won {session.game_type.name} in {session.move_count} moves")
        if self.game_logger:
            self.game_logger.log_game_over(self.games_started, session)
