"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from patience.logging import GameLogConfig
from patience.models.game_type import DEFAULT_GAME_TYPES, GameType, GameTypeCatalog


class GameConfig(BaseModel):
    """Game configuration."""

    game_type_index: int = 0
    seed: int | None = None  # None shuffles differently every run


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_hidden: bool = False  # print face-down cards in the text display


class Config(BaseModel):
    """Root configuration."""

    game: GameConfig = GameConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()

    # Appended to the built-in game types, validated on load
    extra_game_types: list[GameType] = Field(default_factory=list)

    def build_catalog(self) -> GameTypeCatalog:
        """Create the game type catalog for this configuration."""
        return GameTypeCatalog([*DEFAULT_GAME_TYPES, *self.extra_game_types])


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.

    Raises:
        pydantic.ValidationError: If the file defines an invalid game type.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
