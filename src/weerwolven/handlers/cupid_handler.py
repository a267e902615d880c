"""Cupid pairing handler."""

import logging
from typing import ClassVar, Sequence, TYPE_CHECKING

from weerwolven.models.actions import Action, Couple
from weerwolven.models.player import Player
from weerwolven.models.roles import Role
from .base import NightHandler, PlayerSelector, select_player

if TYPE_CHECKING:
    from weerwolven.engine.game_state import GameState

logger = logging.getLogger(__name__)


class CupidHandler(NightHandler):
    """Handler for Cupid binding two lovers.

    Cupid picks two distinct living players, possibly including itself.
    Players already in love, or chosen by another Cupid tonight, cannot be
    picked again. The action count gate keeps Cupid to a single pairing
    per game.
    """

    role: ClassVar[Role] = Role.CUPID

    async def __call__(
        self,
        state: "GameState",
        actors: Sequence[Player],
        selector: PlayerSelector,
    ) -> list[Action]:
        actions: list[Action] = []
        taken: set[str] = set()

        def is_free(p: Player) -> bool:
            return p.properties.in_love_with is None and p.name not in taken

        for cupid in actors:
            if sum(1 for p in state.living_players if is_free(p)) < 2:
                logger.info("%s finds nobody left to pair", cupid.name)
                continue

            first = await select_player(
                selector,
                state,
                prompt=f"Night {state.date}: {cupid.name} (Cupid) chooses the first lover",
                eligible=is_free,
            )
            taken.add(first.name)
            second = await select_player(
                selector,
                state,
                prompt=f"Night {state.date}: {cupid.name} (Cupid) chooses who {first.name} falls for",
                eligible=is_free,
            )
            taken.add(second.name)
            actions.append(Couple(performer=cupid.name, targets=(first.name, second.name)))
        return actions
