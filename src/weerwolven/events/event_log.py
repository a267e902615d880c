"""Chronological event log organized by game phase sequence."""

from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, SerializeAsAny, model_validator

from weerwolven.models.roles import Daypart
from .game_events import (
    SubPhase,
    GameStart,
    NightOutcome,
    Lynch,
    GameOver,
    GameEvent,
)
from .event_formatter import EventFormatter


# ============================================================================
# SubPhaseLog Container
# ============================================================================

class SubPhaseLog(BaseModel):
    """Subphase container with events.

    A subphase represents a micro-phase within a night or day phase,
    containing zero or more game events.
    """

    micro_phase: SubPhase
    events: list[SerializeAsAny[GameEvent]] = Field(default_factory=list)

    def describe(self, roles_secret: Optional[dict[str, str]] = None) -> str:
        """Format subphase log as string with optional role context."""
        formatter = EventFormatter(roles_secret)
        lines = [self.micro_phase.name]
        for event in self.events:
            for line in formatter.format(event).split("\n"):
                lines.append(f"    {line}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()


# ============================================================================
# Unified Phase
# ============================================================================

class PhaseLog(BaseModel):
    """Container for one DAY or NIGHT.

    Numbering follows the game date: Day 0 is the election day before
    the first night, Night 1 follows it.
    """

    number: int
    kind: Daypart
    subphases: list[SubPhaseLog] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_number(self) -> "PhaseLog":
        if self.number < 0:
            raise ValueError(f"number must be >= 0, got {self.number}")
        if self.kind == Daypart.NIGHT and self.number < 1:
            raise ValueError(f"there is no Night {self.number}")
        return self

    def describe(self, roles_secret: Optional[dict[str, str]] = None) -> str:
        header = f"=== {self.kind.name} {self.number} ==="

        if not self.subphases:
            return f"{header}\n  (no events)"

        lines = [header]
        for i, sp in enumerate(self.subphases):
            if i > 0:
                lines.append("")
            for line in sp.describe(roles_secret).split("\n"):
                lines.append(f"  {line}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()


# ============================================================================
# Full Game Event Log
# ============================================================================

class GameEventLog(BaseModel):
    """
    Chronological event log with events organized by time.

    Structure:
    - game_start: Initial setup
    - phases: Chronological sequence of PhaseLog
    - game_over: Final result
    """

    game_id: str = Field(default_factory=lambda: datetime.now().strftime("%Y%m%d_%H%M%S"))
    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())
    player_count: int
    roles_secret: dict[str, str] = Field(default_factory=dict)

    game_start: Optional[GameStart] = None
    phases: list[PhaseLog] = Field(default_factory=list)
    game_over: Optional[GameOver] = None

    def __str__(self) -> str:
        """Human-readable summary of the entire game with role context."""
        formatter = EventFormatter(self.roles_secret)

        lines = [f"Game {self.game_id} ({self.player_count} players)"]
        for i, phase in enumerate(self.phases):
            if i > 0:
                lines.append("")
            lines.extend(phase.describe(self.roles_secret).split("\n"))

        if self.game_over:
            lines.append("")
            lines.append(f"  {formatter.format(self.game_over)}")

        return "\n".join(lines)

    def to_yaml(self, include_roles: bool = False) -> str:
        """Serialize the event log to YAML string."""
        data = self.model_dump(mode='json')
        if not include_roles:
            data["roles_secret"] = {}
            if data.get("game_start"):
                data["game_start"]["roles_secret"] = {}
        return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def save_to_file(self, filepath: Union[str, Path], include_roles: bool = False) -> None:
        """Serialize the event log to a YAML file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.to_yaml(include_roles=include_roles))

    # =========================================================================
    # Phase Navigation
    # =========================================================================

    def get_phase(self, kind: Daypart, number: int) -> Optional[PhaseLog]:
        for phase in self.phases:
            if phase.kind == kind and phase.number == number:
                return phase
        return None

    def get_night(self, night_number: int) -> Optional[PhaseLog]:
        return self.get_phase(Daypart.NIGHT, night_number)

    def get_day(self, day_number: int) -> Optional[PhaseLog]:
        return self.get_phase(Daypart.DAY, day_number)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_events(self) -> list[GameEvent]:
        """All events in chronological order."""
        events: list[GameEvent] = []
        for phase in self.phases:
            for subphase in phase.subphases:
                events.extend(subphase.events)
        return events

    def get_all_deaths(self) -> list[tuple[str, str]]:
        """All deaths throughout the game as (name, cause) in order."""
        deaths: list[tuple[str, str]] = []
        for event in self.get_events():
            if isinstance(event, (NightOutcome, Lynch)):
                deaths.extend((name, cause.value) for name, cause in event.deaths.items())
        return deaths
