"""Main entry point for the patience text client."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, TextIO

from patience.config import load_config
from patience.game.engine import GameEngine
from patience.game.selection import Destination, FoundationTarget, TableauTarget
from patience.logging import GameLogConfig, GameLogger
from patience.models.messages import (
    ClearSelection,
    MoveStockToTableau,
    Restart,
    SelectSpare,
    SelectTableau,
    Undo,
)
from patience.models.selection import NoSelection
from patience.utils.logger import BoardDisplay, setup_logging

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  deal                 deal one card from the stock onto every column
  t <col> <row> <col>  move the run starting at (col, row) to another column
  tf <col> <row> <f>   move the run starting at (col, row) to foundation f
  s <L|R> <col>        move a spare card to a column
  sf <L|R> <f>         move a spare card to foundation f
  undo | restart       step back one move | back to the original deal
  new [index]          start a new game
  quit"""

SPARE_CELLS = {"L": 0, "R": 1}


class CommandError(ValueError):
    """Raised for a command line that cannot be understood."""


def _int(text: str, what: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise CommandError(f"Invalid {what}: {text!r}") from None


class CommandLine:
    """Turns typed commands into session messages."""

    def __init__(self, engine: GameEngine, display: BoardDisplay, out: Callable[[str], None] = print):
        self.engine = engine
        self.display = display
        self.out = out

    @property
    def session(self):
        return self.engine.session

    def _select_tableau(self, col_text: str, row_text: str) -> None:
        col = _int(col_text, "column")
        row = _int(row_text, "row")
        column = self.session.board.column(col)
        if not 0 <= row < len(column):
            raise CommandError(f"No card at column {col}, row {row}")
        self.engine.dispatch(SelectTableau(card=column[row]))

    def _select_spare(self, cell_text: str) -> None:
        cell = SPARE_CELLS.get(cell_text.upper())
        if cell is None:
            raise CommandError(f"Spare cell must be L or R, not {cell_text!r}")
        card = self.session.board.spare[cell]
        if card is None:
            raise CommandError("That spare cell is empty")
        self.engine.dispatch(SelectSpare(card=card))

    def _move_to(self, destination: Destination) -> bool:
        selection = self.session.selection
        if isinstance(selection, NoSelection):
            self.out("Cannot pick up those cards!")
            return False
        move = self.engine.session.selection_machine.move_for_destination(selection, destination)
        if move is not None:
            self.engine.dispatch(move)
        if not isinstance(self.session.selection, NoSelection):
            self.engine.dispatch(ClearSelection())
            self.out("Cannot move!")
            return False
        return True

    def execute(self, line: str) -> bool:
        """Run one command.

        Returns:
            False when the user asked to quit
        """
        parts = line.split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]

        if command in ("quit", "q", "exit"):
            return False
        if command in ("help", "h", "?"):
            self.out(HELP_TEXT)
            return True
        if command == "new":
            index = _int(args[0], "game type") if args else None
            self.engine.new_game(index)
        elif command == "deal":
            moves_before = self.session.move_count
            self.engine.dispatch(MoveStockToTableau())
            if self.session.move_count == moves_before:
                self.out("No card left!")
        elif command == "undo":
            history_before = len(self.session.undo_history)
            self.engine.dispatch(Undo())
            if len(self.session.undo_history) == history_before:
                self.out("Cannot undo!")
        elif command == "restart":
            self.engine.dispatch(Restart())
        elif command == "t" and len(args) == 3:
            self._select_tableau(args[0], args[1])
            self._move_to(TableauTarget(column=_int(args[2], "column")))
        elif command == "tf" and len(args) == 3:
            self._select_tableau(args[0], args[1])
            self._move_to(FoundationTarget(index=_int(args[2], "foundation")))
        elif command == "s" and len(args) == 2:
            self._select_spare(args[0])
            self._move_to(TableauTarget(column=_int(args[1], "column")))
        elif command == "sf" and len(args) == 2:
            self._select_spare(args[0])
            self._move_to(FoundationTarget(index=_int(args[1], "foundation")))
        else:
            raise CommandError(f"Invalid command: {line.strip()!r}")
        return True

    def run(self, stream: TextIO = sys.stdin) -> None:
        """Read commands until quit, end of input or a won game."""
        self.display.print_session(self.session)
        for line in stream:
            try:
                if not self.execute(line):
                    break
            except CommandError as e:
                self.out(str(e))
                continue
            self.display.print_session(self.session)
            if self.session.is_over:
                self.out("You win!")
                break


def generate_log_filename(log_dir: str, game_type_name: str) -> str:
    """Generate log filename with timestamp and game type.

    Format: {ISO timestamp}_{game type}.jsonl

    Args:
        log_dir: Directory for log files.
        game_type_name: Name of the first game type played.

    Returns:
        Full path to log file.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    slug = game_type_name.lower().replace(" ", "-")
    return str(Path(log_dir) / f"{timestamp}_{slug}.jsonl")


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(description="Patience (solitaire) rule engine, text client")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-g",
        "--game-type",
        type=int,
        help="Game type index (overrides config)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Shuffle seed (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-hidden",
        action="store_true",
        help="Show face-down cards in output",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List game types and exit",
    )

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        return 2

    # Apply command-line overrides
    if args.game_type is not None:
        config.game.game_type_index = args.game_type
    if args.seed is not None:
        config.game.seed = args.seed
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_hidden:
        config.logging.show_hidden = True

    setup_logging(config.logging.level)
    display = BoardDisplay(show_hidden=config.logging.show_hidden)

    catalog = config.build_catalog()
    if args.list:
        display.print_catalog(catalog)
        return 0

    game_log_enabled = args.game_log is not None or config.game_log.enabled
    game_log_dir = str(args.game_log) if args.game_log else str(Path(config.game_log.output_path).parent)
    if game_log_enabled:
        game_type = catalog.get_game_type(config.game.game_type_index)
        game_log_config = GameLogConfig(
            enabled=True,
            output_path=generate_log_filename(game_log_dir, game_type.name),
        )
        print(f"Game log: {game_log_config.output_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    try:
        with GameLogger(game_log_config) as game_logger:
            engine = GameEngine(config, game_logger=game_logger)
            engine.new_game()
            print("Type 'help' for commands.")
            CommandLine(engine, display).run()
        return 0
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
