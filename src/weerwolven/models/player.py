"""Player model and per-player state."""

from enum import Enum
from typing import Optional, Sequence
from pydantic import BaseModel, Field

from weerwolven.errors import DuplicatePlayerError
from weerwolven.models.actions import ProtectionGrant
from weerwolven.models.roles import (
    Alignment,
    Daypart,
    Role,
    can_act,
    role_info,
)


class PlayerType(str, Enum):
    """Type of player (AI or Human)."""

    AI = "AI"
    HUMAN = "HUMAN"


class PlayerProperties(BaseModel):
    """State tags attached to a player.

    remaining_actions: actions left for rate-limited roles (None = unlimited)
    in_love_with: name of the lover; a lookup key, not an owned player
    protection: tonight's protection grant, cleared when the next night starts
    """

    remaining_actions: Optional[int] = None
    in_love_with: Optional[str] = None
    protection: Optional[ProtectionGrant] = None


class Player(BaseModel):
    """Represents a player in the game.

    Name is the identity within a game. Seat keeps a stable order for
    prompts and announcements.
    """

    seat: int
    name: str
    role: Role = Role.UNASSIGNED
    player_type: PlayerType = PlayerType.AI
    is_alive: bool = True
    can_vote: bool = True
    is_mayor: bool = False
    role_revealed: bool = False
    properties: PlayerProperties = Field(default_factory=PlayerProperties)

    @property
    def alignment(self) -> Alignment:
        return role_info(self.role).alignment

    def assign_role(self, role: Role) -> None:
        """Give the player a role together with the role's default properties."""
        self.role = role
        self.properties = PlayerProperties(
            remaining_actions=role_info(role).action_count,
        )

    def can_act(self, daypart: Daypart, date: int) -> bool:
        """Dead players never act."""
        return self.is_alive and can_act(self.role, daypart, date, self.properties)

    def to_dict(self) -> dict:
        """Convert to dictionary, hiding secret info unless revealed."""
        return {
            "seat": self.seat,
            "name": self.name,
            "role": self.role.value if self.role_revealed else None,
            "is_alive": self.is_alive,
            "is_mayor": self.is_mayor,
        }


def assign_roles(names: Sequence[str], roles: Sequence[Role]) -> dict[str, Player]:
    """Create the roster, dealing roles to names in order.

    Returns:
        Dict mapping name -> Player, in seat order.

    Raises:
        DuplicatePlayerError: If a name appears twice.
        ValueError: If the number of roles does not match the number of names.
    """
    if len(set(names)) != len(names):
        raise DuplicatePlayerError(f"Player names must be unique: {list(names)}")
    if len(roles) != len(names):
        raise ValueError(f"Got {len(roles)} roles for {len(names)} players")

    players: dict[str, Player] = {}
    for seat, (name, role) in enumerate(zip(names, roles)):
        player = Player(seat=seat, name=name)
        player.assign_role(role)
        players[name] = player
    return players
