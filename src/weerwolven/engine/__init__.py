"""Engine package - game orchestration components."""

from .game_state import GameState
from .night_action_resolver import NightActionResolver, NightResolution
from .event_collector import EventCollector
from .validator import (
    GameValidator,
    NoOpValidator,
    CollectingValidator,
    create_validator,
)
from .night_scheduler import NightScheduler, NIGHT_HANDLERS
from .day_scheduler import DayScheduler
from .weerwolven_game import WeerwolvenGame

__all__ = [
    "GameState",
    "NightActionResolver",
    "NightResolution",
    "EventCollector",
    "GameValidator",
    "NoOpValidator",
    "CollectingValidator",
    "create_validator",
    "NightScheduler",
    "NIGHT_HANDLERS",
    "DayScheduler",
    "WeerwolvenGame",
]
