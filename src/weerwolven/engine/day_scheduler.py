"""DayScheduler - orchestrates the day phase of the Weerwolven game.

Day 0: the village elects a mayor, nobody is lynched.
Day N: the village lynches one player.

Mayor succession is a separate step so the controller can run it only
when the game goes on after a death.
"""

import logging
from typing import Optional, TYPE_CHECKING

from weerwolven.engine.event_collector import EventCollector
from weerwolven.engine.game_state import GameState
from weerwolven.events.game_events import MayorElection
from weerwolven.handlers.base import PlayerSelector
from weerwolven.handlers.lynch_handler import LynchHandler
from weerwolven.handlers.mayor_handler import MayorHandler
from weerwolven.models.roles import DeathCause

if TYPE_CHECKING:
    from weerwolven.engine.validator import GameValidator

logger = logging.getLogger(__name__)


class DayScheduler:
    """Orchestrates the day phase: election on Day 0, a lynch on later days."""

    def __init__(self, validator: Optional["GameValidator"] = None):
        self._lynch_handler = LynchHandler()
        self._mayor_handler = MayorHandler()
        self._validator = validator

    async def run_day(
        self,
        state: GameState,
        selector: PlayerSelector,
        collector: EventCollector,
    ) -> dict[str, DeathCause]:
        """Run a complete day. The state must already be on DAY.

        Returns:
            Dict mapping name -> cause for every death of the day.
        """
        if state.date == 0:
            await self.ensure_mayor(state, selector, collector)
            return {}

        previously_dead = {p.name for p in state.dead_players}
        lynch = await self._lynch_handler(state, selector)
        logger.debug("Day %d lynch: %s", state.date, lynch.deaths)

        if self._validator:
            await self._validator.on_deaths(lynch.deaths, previously_dead, state)

        collector.add_event(lynch)
        return lynch.deaths

    async def ensure_mayor(
        self,
        state: GameState,
        selector: PlayerSelector,
        collector: EventCollector,
    ) -> Optional[MayorElection]:
        """Elect a mayor, or a successor if the mayor has died."""
        election = await self._mayor_handler(state, selector)
        if election is not None:
            collector.add_event(election)
        return election
