"""
Configuration - Game rule constants and server settings.

Rule constants live in GameConfig so a table can be created with
house-rule variants. Server settings are read from the environment:

    LOLOS_ENV               development | production
    LOLOS_ALLOWED_ORIGINS   comma-separated CORS origins (default "*")
    LOLOS_STALE_SECONDS     idle time before a finished table is dropped
    LOLOS_LOG_LEVEL         logging level name (default INFO)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .engine_core.state import Difficulty


@dataclass(frozen=True)
class GameConfig:
    """Tunable rule constants."""
    cards_per_player: int = 10
    # Highest number card, keyed by difficulty value
    max_number: dict[str, int] = field(
        default_factory=lambda: {"easy": 12, "full": 25}
    )
    identical_play_limit: int = 2
    # Declaring is allowed up to this hand size
    lolos_call_limit: int = 2
    # Ending a turn at exactly this hand size without declaring costs a card
    lolos_penalty_hand_size: int = 1
    operation_penalty: int = 2
    min_players: int = 2

    def max_number_for(self, difficulty: Difficulty) -> int:
        return self.max_number[difficulty.value]


DEFAULT_CONFIG = GameConfig()


@dataclass(frozen=True)
class ServerConfig:
    env: str = "development"
    allowed_origins: tuple[str, ...] = ("*",)
    stale_seconds: int = 1800
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> ServerConfig:
        return cls(
            env=os.getenv("LOLOS_ENV", "development"),
            allowed_origins=tuple(os.getenv("LOLOS_ALLOWED_ORIGINS", "*").split(",")),
            stale_seconds=int(os.getenv("LOLOS_STALE_SECONDS", "1800")),
            log_level=os.getenv("LOLOS_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=level or ServerConfig.from_env().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
