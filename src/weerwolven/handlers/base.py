"""Shared base types for Weerwolven game handlers.

This module contains the collaborator seam used by every handler:
- PlayerSelector Protocol: interface for whoever picks players (human or AI)
- select_player: the re-prompting selection loop
- NightHandler: base class for role handlers that produce night actions
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, ClassVar, Optional, Protocol, Sequence, TYPE_CHECKING

from weerwolven.errors import NoEligiblePlayerError
from weerwolven.models.actions import Action
from weerwolven.models.player import Player
from weerwolven.models.roles import Role

if TYPE_CHECKING:
    from weerwolven.engine.game_state import GameState

logger = logging.getLogger(__name__)


# ============================================================================
# PlayerSelector Protocol
# ============================================================================


class PlayerSelector(Protocol):
    """Anyone (AI or human) that can pick a player.

    Selectors return raw strings. Handlers are responsible for matching
    and validation, and ask again until the answer is usable.
    """

    async def select(
        self,
        prompt: str,
        candidates: Sequence[str],
        hint: Optional[str] = None,
    ) -> str:
        """Pick a player and return their name.

        Args:
            prompt: What is being decided, and by whom
            candidates: Names that would be accepted
            hint: Why the previous answer was rejected, if it was

        Returns:
            Raw response string to be matched by the handler
        """
        ...


# ============================================================================
# Selection loop
# ============================================================================


def _match_name(raw: str, candidates: Sequence[str]) -> Optional[str]:
    """Match a raw answer to a candidate, ignoring case and surrounding space."""
    cleaned = raw.strip()
    if cleaned in candidates:
        return cleaned
    lowered = cleaned.casefold()
    for name in candidates:
        if name.casefold() == lowered:
            return name
    return None


async def select_player(
    selector: PlayerSelector,
    state: "GameState",
    prompt: str,
    eligible: Callable[[Player], bool] = lambda p: True,
) -> Player:
    """Ask the selector until it names a living, eligible player.

    Invalid answers are never an error: the selector is asked again with
    a hint, as often as needed.

    Raises:
        NoEligiblePlayerError: If no living player satisfies the predicate.
    """
    candidates = [p.name for p in state.living_players if eligible(p)]
    if not candidates:
        raise NoEligiblePlayerError(f"Nobody can be chosen for: {prompt}")

    hint: Optional[str] = None
    while True:
        raw = await selector.select(prompt, candidates, hint=hint)
        name = _match_name(raw, candidates)
        if name is not None:
            return state.get_player(name)

        if _match_name(raw, list(state.players)) is None:
            hint = f"There is no player called '{raw.strip()}'. Choose one of: {', '.join(candidates)}"
        else:
            hint = f"'{raw.strip()}' cannot be chosen. Choose one of: {', '.join(candidates)}"
        logger.debug("Rejected selection %r: %s", raw, hint)


# ============================================================================
# Night handler base
# ============================================================================


class NightHandler(ABC):
    """Base class for handlers that turn a role's choice into night actions.

    Subclasses set `role` and implement `__call__`, which receives every
    living player of that role who may act tonight.
    """

    role: ClassVar[Role]

    @abstractmethod
    async def __call__(
        self,
        state: "GameState",
        actors: Sequence[Player],
        selector: PlayerSelector,
    ) -> list[Action]:
        ...
