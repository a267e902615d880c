"""Events package."""

from weerwolven.events.game_events import (
    GameEvent,
    SubPhase,
    GameStart,
    NightAction,
    NightOutcome,
    MayorElection,
    Lynch,
    GameOver,
)
from weerwolven.events.event_formatter import (
    EventFormatter,
    DEATH_DESCRIPTIONS,
    describe_death,
)
from weerwolven.events.event_log import (
    GameEventLog,
    PhaseLog,
    SubPhaseLog,
)

__all__ = [
    "GameEvent",
    "SubPhase",
    "GameStart",
    "NightAction",
    "NightOutcome",
    "MayorElection",
    "Lynch",
    "GameOver",
    "EventFormatter",
    "DEATH_DESCRIPTIONS",
    "describe_death",
    "GameEventLog",
    "PhaseLog",
    "SubPhaseLog",
]
