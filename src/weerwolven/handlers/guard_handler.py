"""Guard protection handler."""

from typing import ClassVar, Sequence, TYPE_CHECKING

from weerwolven.models.actions import Action, Protect
from weerwolven.models.player import Player
from weerwolven.models.roles import Role, role_info
from .base import NightHandler, PlayerSelector, select_player

if TYPE_CHECKING:
    from weerwolven.engine.game_state import GameState


class GuardHandler(NightHandler):
    """Handler for the guard's nightly protection.

    The protection inherits its priority from the guard role, so it
    outranks the werewolf attack. The guard may protect itself.
    """

    role: ClassVar[Role] = Role.GUARD

    async def __call__(
        self,
        state: "GameState",
        actors: Sequence[Player],
        selector: PlayerSelector,
    ) -> list[Action]:
        actions: list[Action] = []
        for guard in actors:
            target = await select_player(
                selector,
                state,
                prompt=f"Night {state.date}: {guard.name} (Guard) chooses who to protect",
            )
            actions.append(Protect(
                performer=guard.name,
                targets=(target.name,),
                priority=role_info(guard.role).action_priority,
            ))
        return actions
