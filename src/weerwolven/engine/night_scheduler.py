"""NightScheduler - orchestrates the night phase of the Weerwolven game.

Night order:
1. Ask every role that may act for its actions (highest priority first)
2. Execute visit actions (pairing lovers) unconditionally
3. Resolve attacks against protections via NightActionResolver
4. Apply deaths, chained deaths included
"""

import asyncio
import logging
from typing import Optional, Sequence, TYPE_CHECKING

from weerwolven.engine.event_collector import EventCollector
from weerwolven.engine.game_state import GameState
from weerwolven.engine.night_action_resolver import NightActionResolver, NightResolution
from weerwolven.events.game_events import NightAction, NightOutcome
from weerwolven.handlers.base import NightHandler, PlayerSelector
from weerwolven.handlers.cupid_handler import CupidHandler
from weerwolven.handlers.guard_handler import GuardHandler
from weerwolven.handlers.werewolf_handler import WerewolfHandler
from weerwolven.models.actions import Action, ActionType
from weerwolven.models.config import GameMode
from weerwolven.models.player import Player
from weerwolven.models.roles import DeathCause, Role, role_info

if TYPE_CHECKING:
    from weerwolven.engine.validator import GameValidator

logger = logging.getLogger(__name__)


NIGHT_HANDLERS: dict[Role, NightHandler] = {
    Role.WEREWOLF: WerewolfHandler(),
    Role.CUPID: CupidHandler(),
    Role.GUARD: GuardHandler(),
}


class NightScheduler:
    """Orchestrates the night phase: collect actions -> visits -> resolution.

    In SEQUENTIAL mode roles are asked one after the other and visit
    actions take effect as soon as they are chosen. In CONCURRENT mode all
    roles are asked at once; their answers are joined before any visit
    action executes or the resolver runs.
    """

    def __init__(
        self,
        mode: GameMode = GameMode.SEQUENTIAL,
        validator: Optional["GameValidator"] = None,
        handlers: Optional[dict[Role, NightHandler]] = None,
    ):
        self._mode = mode
        self._validator = validator
        self._handlers = handlers if handlers is not None else NIGHT_HANDLERS
        self._resolver = NightActionResolver()

    async def run_night(
        self,
        state: GameState,
        selector: PlayerSelector,
        collector: EventCollector,
    ) -> dict[str, DeathCause]:
        """Run a complete night. The state must already be on NIGHT.

        Returns:
            Dict mapping name -> cause for every death of the night.
        """
        state.clear_night_properties()

        groups = self._group_actors(state)
        if self._mode == GameMode.CONCURRENT:
            actions = await self._collect_concurrent(state, groups, selector)
        else:
            actions = await self._collect_sequential(state, groups, selector)

        if self._validator:
            await self._validator.on_night_actions(actions, state)

        self._spend_actions(state, actions)

        resolution = self._resolver.resolve(state, actions)
        self._record_actions(resolution, collector)

        previously_dead = {p.name for p in state.dead_players}
        deaths = state.apply_night_resolution(resolution)
        logger.debug("Night %d deaths: %s", state.date, deaths)

        if self._validator:
            await self._validator.on_deaths(deaths, previously_dead, state)

        collector.add_event(NightOutcome(date=state.date, deaths=deaths))
        return deaths

    def _group_actors(self, state: GameState) -> list[tuple[NightHandler, list[Player]]]:
        """Pair each handler with the players of its role who may act tonight.

        Ordered by role priority, highest first, then by seat.
        """
        by_role: dict[Role, list[Player]] = {}
        for player in state.actors():
            by_role.setdefault(player.role, []).append(player)

        groups = []
        for role in sorted(by_role, key=lambda r: -(role_info(r).action_priority or 0)):
            handler = self._handlers.get(role)
            if handler is None:
                logger.warning("No night handler for %s, skipping", role.value)
                continue
            groups.append((handler, by_role[role]))
        return groups

    async def _collect_sequential(
        self,
        state: GameState,
        groups: Sequence[tuple[NightHandler, list[Player]]],
        selector: PlayerSelector,
    ) -> list[Action]:
        actions: list[Action] = []
        for handler, actors in groups:
            chosen = await handler(state, actors, selector)
            self._execute_visits(state, chosen)
            actions.extend(chosen)
        return actions

    async def _collect_concurrent(
        self,
        state: GameState,
        groups: Sequence[tuple[NightHandler, list[Player]]],
        selector: PlayerSelector,
    ) -> list[Action]:
        results = await asyncio.gather(
            *(handler(state, actors, selector) for handler, actors in groups)
        )
        actions = [action for chosen in results for action in chosen]
        self._execute_visits(state, actions)
        return actions

    def _execute_visits(self, state: GameState, actions: Sequence[Action]) -> None:
        for action in actions:
            if action.action_type == ActionType.VISIT:
                logger.debug("Executing %s", action)
                action.execute(state)

    def _spend_actions(self, state: GameState, actions: Sequence[Action]) -> None:
        """Decrement the action count of every rate-limited performer."""
        for performer in {a.performer for a in actions}:
            properties = state.get_player(performer).properties
            if properties.remaining_actions is not None:
                properties.remaining_actions -= 1

    def _record_actions(self, resolution: NightResolution, collector: EventCollector) -> None:
        for index, action in enumerate(resolution.actions):
            collector.add_event(NightAction(
                actor=action.performer,
                kind=type(action).__name__,
                action_type=action.action_type,
                priority=action.priority,
                targets=list(action.targets),
                pruned_targets=resolution.pruned.get(index, []),
            ))
