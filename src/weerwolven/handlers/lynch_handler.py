"""Day lynch handler."""

from typing import TYPE_CHECKING

from weerwolven.events.game_events import Lynch
from .base import PlayerSelector, select_player

if TYPE_CHECKING:
    from weerwolven.engine.game_state import GameState


class LynchHandler:
    """Handler for the village's daily lynch.

    The outcome of the vote is supplied by the selector. A lynch is an
    immediate, unconditional death and never passes through the night
    protection pipeline.
    """

    async def __call__(
        self,
        state: "GameState",
        selector: PlayerSelector,
    ) -> Lynch:
        victim = await select_player(
            selector,
            state,
            prompt=f"Day {state.date}: the village votes who to lynch",
        )
        deaths = state.lynch(victim.name)
        return Lynch(date=state.date, lynched=victim.name, deaths=deaths)
