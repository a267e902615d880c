"""WeerwolvenGame - main game controller that drives the Day/Night loop."""

import logging
from typing import Callable, Optional, TYPE_CHECKING

from weerwolven.engine.day_scheduler import DayScheduler
from weerwolven.engine.event_collector import EventCollector
from weerwolven.engine.game_state import GameState
from weerwolven.engine.night_scheduler import NightScheduler
from weerwolven.errors import UnassignedRoleError
from weerwolven.events.event_log import GameEventLog
from weerwolven.events.game_events import GameEvent, GameOver, GameStart
from weerwolven.handlers.base import PlayerSelector
from weerwolven.models.config import GameConfig
from weerwolven.models.player import Player

if TYPE_CHECKING:
    from weerwolven.engine.validator import GameValidator

logger = logging.getLogger(__name__)


class WeerwolvenGame:
    """Main game controller - runs the complete game loop.

    Game Flow:
        1. Day 0: mayor election
        2. Night 1: role actions -> resolution -> victory check -> mayor succession
        3. Day 1: lynch -> victory check -> mayor succession
        4. Night 2: (repeat)
        5. ... until a win condition holds or max_days is reached

    The game halts as soon as a win condition holds, without finishing
    the rest of the phase.
    """

    def __init__(
        self,
        players: dict[str, Player],
        selector: PlayerSelector,
        config: Optional[GameConfig] = None,
        validator: Optional["GameValidator"] = None,
        event_callback: Optional[Callable[[GameEvent], None]] = None,
    ):
        """Initialize the WeerwolvenGame.

        Args:
            players: Dict mapping name to Player with an assigned role.
            selector: Whoever picks targets, lynch victims and mayors.
            config: Game settings; defaults to GameConfig().
            validator: Optional validator for runtime rule checking.
            event_callback: Announcement hook called with every event.

        Raises:
            UnassignedRoleError: If any player has no role yet.
        """
        self.config = config or GameConfig()
        self.selector = selector
        self._validator = validator

        self._state = GameState(players=players)
        unassigned = self._state.unassigned_players()
        if unassigned:
            raise UnassignedRoleError(f"Players without a role: {unassigned}")

        self._collector = EventCollector(on_event=event_callback)
        self._night_scheduler = NightScheduler(mode=self.config.mode, validator=validator)
        self._day_scheduler = DayScheduler(validator=validator)

    @property
    def state(self) -> GameState:
        return self._state

    def win_civilians(self) -> bool:
        return self._state.win_civilians()

    def win_wolves(self) -> bool:
        return self._state.win_wolves()

    async def run(self) -> tuple[GameEventLog, list[str]]:
        """Run the complete game until a win condition holds.

        Returns:
            Tuple of (event_log, winners) where winners are the names of the
            living players on every winning side (empty if max_days ran out).
        """
        state = self._state
        self._collector.set_game_start(GameStart(
            date=state.date,
            player_count=len(state.players),
            roles_secret={name: p.role.value for name, p in state.players.items()},
        ))
        logger.info("Game started with %d players", len(state.players))

        if self._validator:
            await self._validator.on_game_start(state)

        await self._begin_phase()
        await self._day_scheduler.run_day(state, self.selector, self._collector)
        await self._end_phase()

        while not state.is_game_over() and state.date < self.config.max_days:
            state.advance()
            await self._begin_phase()
            await self._night_scheduler.run_night(state, self.selector, self._collector)
            if state.is_game_over():
                break
            await self._day_scheduler.ensure_mayor(state, self.selector, self._collector)
            await self._end_phase()

            state.advance()
            await self._begin_phase()
            await self._day_scheduler.run_day(state, self.selector, self._collector)
            if state.is_game_over():
                break
            await self._day_scheduler.ensure_mayor(state, self.selector, self._collector)
            await self._end_phase()

        game_over = self._create_game_over()
        self._collector.set_game_over(game_over)
        logger.info("Game over on %s %d: %s", state.daypart.value, state.date, game_over.winners)

        if self._validator:
            await self._validator.on_game_over(game_over, state)

        return self._collector.get_event_log(), game_over.winners

    async def _begin_phase(self) -> None:
        state = self._state
        self._collector.create_phase_log(state.daypart, state.date)
        if self._validator:
            await self._validator.on_phase_start(state.daypart, state.date, state)

    async def _end_phase(self) -> None:
        state = self._state
        if self._validator:
            await self._validator.on_phase_end(state.daypart, state.date, state)

    def _create_game_over(self) -> GameOver:
        state = self._state
        if not state.is_game_over():
            logger.warning("No winner after %d days, stopping", self.config.max_days)
            return GameOver(date=state.date, phase=state.daypart, final_date=state.date)

        return GameOver(
            date=state.date,
            phase=state.daypart,
            civilians_win=state.win_civilians(),
            wolves_win=state.win_wolves(),
            winners=state.winners(),
            final_date=state.date,
        )
