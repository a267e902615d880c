"""Mayor election and succession handler."""

from typing import Optional, TYPE_CHECKING

from weerwolven.events.game_events import MayorElection, SubPhase
from .base import PlayerSelector, select_player

if TYPE_CHECKING:
    from weerwolven.engine.game_state import GameState


class MayorHandler:
    """Handler for the mayor designation.

    On Day 0 the village elects a mayor. Whenever the mayor dies, a living
    successor is chosen before the game continues. The dying mayor's
    choice is made through the same selector.
    """

    async def __call__(
        self,
        state: "GameState",
        selector: PlayerSelector,
    ) -> Optional[MayorElection]:
        """Elect or replace the mayor if needed.

        Returns:
            MayorElection event, or None if the current mayor is alive.
        """
        if not state.needs_mayor():
            return None

        previous = state.mayor
        if previous is None:
            prompt = f"Day {state.date}: the village elects a mayor"
            micro_phase = SubPhase.MAYOR_ELECTION
        else:
            prompt = f"{state.daypart.value.title()} {state.date}: {previous} names a successor as mayor"
            micro_phase = SubPhase.MAYOR_SUCCESSION

        successor = await select_player(selector, state, prompt=prompt)
        state.set_mayor(successor.name)
        return MayorElection(
            date=state.date,
            phase=state.daypart,
            micro_phase=micro_phase,
            mayor=successor.name,
            previous=previous,
        )
