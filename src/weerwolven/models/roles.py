"""Roles, alignments and role rosters."""

import random
from enum import Enum
from typing import Callable, Optional, TYPE_CHECKING
from pydantic import BaseModel, ConfigDict

from weerwolven.errors import UnassignedRoleError

if TYPE_CHECKING:
    from weerwolven.models.player import Player, PlayerProperties


class Daypart(str, Enum):
    """The two half-turns of one game date."""

    DAY = "DAY"
    NIGHT = "NIGHT"


class Alignment(str, Enum):
    """Win-faction classification of a role.

    NEUTRAL counts toward both win checks, ALONE toward neither.
    """

    GOOD = "GOOD"
    NEUTRAL = "NEUTRAL"
    EVIL = "EVIL"
    ALONE = "ALONE"

    @property
    def is_good(self) -> bool:
        return self in (Alignment.GOOD, Alignment.NEUTRAL)

    @property
    def is_evil(self) -> bool:
        return self in (Alignment.EVIL, Alignment.NEUTRAL)


class DeathCause(str, Enum):
    """Cause of death.

    NATURAL deaths suppress the death hook and lover chaining.
    """

    NATURAL = "NATURAL"
    LYNCHED = "LYNCHED"
    WEREWOLF_ATTACK = "WEREWOLF_ATTACK"
    LOVER_DIED = "LOVER_DIED"


class Role(str, Enum):
    """Player roles in the game."""

    CIVILIAN = "CIVILIAN"
    WEREWOLF = "WEREWOLF"
    CUPID = "CUPID"
    GUARD = "GUARD"
    UNASSIGNED = "UNASSIGNED"  # placeholder before roles are dealt


class RoleInfo(BaseModel):
    """Static rules of a role.

    action_priority is None for roles without a night action.
    action_count limits how many times the role may act in a game
    (None means unlimited).
    """

    model_config = ConfigDict(frozen=True)

    alignment: Alignment
    display_name: str
    action_priority: Optional[int] = None
    action_count: Optional[int] = None


ROLE_INFO: dict[Role, RoleInfo] = {
    Role.CIVILIAN: RoleInfo(alignment=Alignment.GOOD, display_name="Burger"),
    Role.WEREWOLF: RoleInfo(
        alignment=Alignment.EVIL, display_name="Weerwolf", action_priority=1,
    ),
    Role.CUPID: RoleInfo(
        alignment=Alignment.GOOD, display_name="Cupido", action_priority=2, action_count=1,
    ),
    Role.GUARD: RoleInfo(
        alignment=Alignment.GOOD, display_name="Beschermer", action_priority=2,
    ),
}


def role_info(role: Role) -> RoleInfo:
    """Look up the rules of a role.

    Raises:
        UnassignedRoleError: If the role is the UNASSIGNED placeholder.
    """
    if role == Role.UNASSIGNED:
        raise UnassignedRoleError("Role has not been assigned yet")
    return ROLE_INFO[role]


# ============================================================================
# canAct dispatch table
# ============================================================================


def _never(daypart: Daypart, date: int, properties: "PlayerProperties") -> bool:
    return False


def _every_night(daypart: Daypart, date: int, properties: "PlayerProperties") -> bool:
    return daypart == Daypart.NIGHT


_CAN_ACT: dict[Role, Callable[[Daypart, int, "PlayerProperties"], bool]] = {
    Role.CIVILIAN: _never,
    Role.WEREWOLF: _every_night,
    Role.CUPID: _every_night,
    Role.GUARD: _every_night,
}


def can_act(role: Role, daypart: Daypart, date: int, properties: "PlayerProperties") -> bool:
    """Whether a role may act now, given the holder's current properties.

    A used-up action count blocks the role even when its base rule allows it.
    """
    role_info(role)
    if properties.remaining_actions is not None and properties.remaining_actions <= 0:
        return False
    return _CAN_ACT[role](daypart, date, properties)


def on_death(player: "Player", cause: DeathCause) -> None:
    """Role hook fired for every non-natural death: the role is exposed."""
    role_info(player.role)
    player.role_revealed = True


# ============================================================================
# Role rosters
# ============================================================================


class RoleConfig(BaseModel):
    """Role configuration for game setup."""

    role: Role
    count: int = 0
    description: str = ""


CLASSIC_8_PLAYER_CONFIG = [
    RoleConfig(role=Role.WEREWOLF, count=2, description="Eat the village, one bite per night"),
    RoleConfig(role=Role.CUPID, count=1, description="Bind two lovers on the first night"),
    RoleConfig(role=Role.GUARD, count=1, description="Protect one player each night"),
    RoleConfig(role=Role.CIVILIAN, count=4, description="Find and lynch the werewolves"),
]


def civilians_wolves(
    amount: int,
    wolves: Callable[[int], int] = lambda n: n // 4,
    rng: Optional[random.Random] = None,
) -> list[Role]:
    """Generate a shuffled roster of plain Civilians and Werewolves.

    Args:
        amount: Number of players.
        wolves: Maps the player count to the number of werewolves.
        rng: random.Random instance for reproducible shuffling.
    """
    wolf_count = wolves(amount)
    if not 0 <= wolf_count <= amount:
        raise ValueError(f"Cannot have {wolf_count} werewolves among {amount} players")

    roles = [Role.WEREWOLF] * wolf_count + [Role.CIVILIAN] * (amount - wolf_count)
    (rng or random.Random()).shuffle(roles)
    return roles


def create_roles_from_config(
    configs: list[RoleConfig],
    rng: Optional[random.Random] = None,
) -> list[Role]:
    """Expand a role configuration into a shuffled roster."""
    roles: list[Role] = []
    for config in configs:
        roles.extend([config.role] * config.count)

    (rng or random.Random()).shuffle(roles)
    return roles
