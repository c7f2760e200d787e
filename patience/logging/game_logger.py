"""Game logger for step-by-step game replay."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

from pydantic import BaseModel

from patience.models.messages import (
    Move,
    MoveSpareToFoundation,
    MoveSpareToTableau,
    MoveTableauToFoundation,
    MoveTableauToTableau,
)

from .formatters import format_board, format_card, format_cards

if TYPE_CHECKING:
    from patience.game.session import GameSession


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


def _move_detail(move: Move) -> dict[str, Any]:
    """Describe the cards and zones a move touches."""
    match move:
        case MoveTableauToTableau():
            return {"cards": format_cards(move.run), "from": move.from_col, "to": move.to_col}
        case MoveSpareToTableau():
            return {"cards": format_card(move.card), "to": move.to_col}
        case MoveSpareToFoundation():
            return {"cards": format_card(move.card), "foundation": move.to_foundation}
        case MoveTableauToFoundation():
            return {"cards": format_cards(move.run), "from": move.from_col, "foundation": move.to_foundation}
    return {}


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event,
    so a game can be replayed step by step.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_game_start(self, game_num: int, session: GameSession) -> None:
        """Log game start with the dealt board.

        Args:
            game_num: Game number within this run.
            session: Session right after the deal.
        """
        self._write({
            "type": "game_start",
            "timestamp": datetime.now().isoformat(),
            "game": game_num,
            "game_type": session.game_type.name,
            "board": format_board(session.board),
        })

    def log_move(self, game_num: int, move: Move, transferred: int, session: GameSession) -> None:
        """Log a successful move.

        Args:
            game_num: Game number.
            move: The move that was made.
            transferred: Number of cards that changed zone.
            session: Session after the move.
        """
        self._write({
            "type": "move",
            "game": game_num,
            "move": move.kind,
            "detail": _move_detail(move),
            "transferred": transferred,
            "move_count": session.move_count,
            "progress": session.progress(),
            "board": format_board(session.board),
        })

    def log_history(self, game_num: int, action: str, session: GameSession) -> None:
        """Log an undo or restart.

        Args:
            game_num: Game number.
            action: "undo" or "restart".
            session: Session after the board was restored.
        """
        self._write({
            "type": action,
            "game": game_num,
            "history": len(session.undo_history),
            "board": format_board(session.board),
        })

    def log_game_over(self, game_num: int, session: GameSession) -> None:
        """Log a won game.

        Args:
            game_num: Game number.
            session: Finished session.
        """
        self._write({
            "type": "game_over",
            "game": game_num,
            "game_type": session.game_type.name,
            "move_count": session.move_count,
            "undo_used": session.undo_used,
        })
