"""Weerwolven handlers for role decisions and day votes."""

from weerwolven.handlers.base import (
    PlayerSelector,
    NightHandler,
    select_player,
)
from .werewolf_handler import WerewolfHandler
from .cupid_handler import CupidHandler
from .guard_handler import GuardHandler
from .mayor_handler import MayorHandler
from .lynch_handler import LynchHandler

__all__ = [
    "PlayerSelector",
    "NightHandler",
    "select_player",
    "WerewolfHandler",
    "CupidHandler",
    "GuardHandler",
    "MayorHandler",
    "LynchHandler",
]
