"""Werewolf pack attack handler."""

from typing import ClassVar, Sequence, TYPE_CHECKING

from weerwolven.models.actions import Action, Attack
from weerwolven.models.player import Player
from weerwolven.models.roles import Role
from .base import NightHandler, PlayerSelector, select_player

if TYPE_CHECKING:
    from weerwolven.engine.game_state import GameState


class WerewolfHandler(NightHandler):
    """Handler for the werewolves' nightly attack.

    The pack makes one collective decision. The lowest seated living
    werewolf is the representative who performs the attack.

    Fellow werewolves cannot be targeted.
    """

    role: ClassVar[Role] = Role.WEREWOLF

    async def __call__(
        self,
        state: "GameState",
        actors: Sequence[Player],
        selector: PlayerSelector,
    ) -> list[Action]:
        if not actors:
            return []

        representative = min(actors, key=lambda p: p.seat)
        pack = ", ".join(p.name for p in actors)
        target = await select_player(
            selector,
            state,
            prompt=f"Night {state.date}: the werewolves ({pack}) choose a victim",
            eligible=lambda p: p.role != Role.WEREWOLF,
        )
        return [Attack(performer=representative.name, targets=(target.name,))]
