"""Game configuration."""

from enum import Enum
from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, Field


class GameMode(str, Enum):
    """How night actions are collected.

    SEQUENTIAL: roles are asked one at a time.
    CONCURRENT: all roles are asked at once and joined before resolution.
    """

    SEQUENTIAL = "SEQUENTIAL"
    CONCURRENT = "CONCURRENT"


class GameConfig(BaseModel):
    """Tunable game settings."""

    mode: GameMode = GameMode.SEQUENTIAL
    max_days: int = Field(default=20, ge=1)  # forced stop to prevent endless games
    wolves_per_player: int = Field(default=4, ge=1)  # one werewolf per N players

    def wolf_count(self, amount: int) -> int:
        return amount // self.wolves_per_player

    @classmethod
    def load(cls, path: Union[str, Path]) -> "GameConfig":
        """Load a configuration from a YAML file. Missing keys use defaults."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)
