"""Event types for game logging."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from weerwolven.models.actions import ActionType
from weerwolven.models.roles import Daypart, DeathCause


class SubPhase(str, Enum):
    """Micro phases within NIGHT and DAY."""

    # Night micro-phases
    NIGHT_ACTIONS = "NIGHT_ACTIONS"
    NIGHT_RESOLUTION = "NIGHT_RESOLUTION"

    # Day micro-phases
    MAYOR_ELECTION = "MAYOR_ELECTION"
    LYNCH = "LYNCH"

    # Either
    MAYOR_SUCCESSION = "MAYOR_SUCCESSION"
    GAME_OVER = "GAME_OVER"


class GameEvent(BaseModel):
    """Base class for all game events."""

    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    date: int = 0
    phase: Optional[Daypart] = None
    micro_phase: Optional[SubPhase] = None
    debug_info: Optional[str] = None

    def __str__(self) -> str:
        phase = self.phase.value if self.phase else "-"
        return f"{self.__class__.__name__}(date={self.date}, phase={phase})"


class GameStart(GameEvent):
    """Game has started with role assignments."""

    phase: Optional[Daypart] = Daypart.DAY
    player_count: int
    roles_secret: dict[str, str] = Field(default_factory=dict)  # name -> role

    def __str__(self) -> str:
        return f"GameStart({self.player_count} players)"


class NightAction(GameEvent):
    """A role's action for the night, as it stood after protection pruning.

    pruned_targets lists the targets removed because they were protected.
    An attack whose every target was pruned is still recorded.
    """

    phase: Optional[Daypart] = Daypart.NIGHT
    micro_phase: Optional[SubPhase] = SubPhase.NIGHT_ACTIONS
    actor: str
    kind: str
    action_type: ActionType
    priority: int
    targets: list[str] = Field(default_factory=list)
    pruned_targets: list[str] = Field(default_factory=list)

    def __str__(self) -> str:
        targets = ", ".join(self.targets) if self.targets else "nobody"
        return f"{self.kind}(actor={self.actor}, targets={targets})"


class NightOutcome(GameEvent):
    """Night has resolved with all deaths, including chained deaths."""

    phase: Optional[Daypart] = Daypart.NIGHT
    micro_phase: Optional[SubPhase] = SubPhase.NIGHT_RESOLUTION
    deaths: dict[str, DeathCause] = Field(default_factory=dict)  # name -> cause

    def __str__(self) -> str:
        if not self.deaths:
            return "NightOutcome(no deaths)"
        death_strs = [f"{name}({cause.value})" for name, cause in self.deaths.items()]
        return f"NightOutcome(deaths={death_strs})"


class MayorElection(GameEvent):
    """A mayor was elected, or succeeded a dead mayor."""

    micro_phase: Optional[SubPhase] = SubPhase.MAYOR_ELECTION
    mayor: str
    previous: Optional[str] = None

    def __str__(self) -> str:
        if self.previous:
            return f"MayorElection({self.previous} -> {self.mayor})"
        return f"MayorElection({self.mayor})"


class Lynch(GameEvent):
    """The village lynched a player. Chained deaths are included."""

    phase: Optional[Daypart] = Daypart.DAY
    micro_phase: Optional[SubPhase] = SubPhase.LYNCH
    lynched: str
    deaths: dict[str, DeathCause] = Field(default_factory=dict)

    def __str__(self) -> str:
        return f"Lynch(lynched={self.lynched}, deaths={len(self.deaths)})"


class GameOver(GameEvent):
    """Game has ended.

    Both flags may be true at once: an empty or all-NEUTRAL village
    satisfies both win conditions.
    """

    micro_phase: Optional[SubPhase] = SubPhase.GAME_OVER
    civilians_win: bool = False
    wolves_win: bool = False
    winners: list[str] = Field(default_factory=list)
    final_date: int = 0

    def __str__(self) -> str:
        return f"GameOver(winners={self.winners}, date={self.final_date})"
