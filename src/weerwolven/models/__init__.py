"""Models package."""

from weerwolven.models.roles import (
    Daypart,
    Alignment,
    DeathCause,
    Role,
    RoleInfo,
    RoleConfig,
    ROLE_INFO,
    CLASSIC_8_PLAYER_CONFIG,
    role_info,
    can_act,
    on_death,
    civilians_wolves,
    create_roles_from_config,
)
from weerwolven.models.actions import (
    ActionType,
    Action,
    Attack,
    Protect,
    Couple,
    ProtectionGrant,
)
from weerwolven.models.player import (
    PlayerType,
    PlayerProperties,
    Player,
    assign_roles,
)
from weerwolven.models.config import GameMode, GameConfig

__all__ = [
    "Daypart",
    "Alignment",
    "DeathCause",
    "Role",
    "RoleInfo",
    "RoleConfig",
    "ROLE_INFO",
    "CLASSIC_8_PLAYER_CONFIG",
    "role_info",
    "can_act",
    "on_death",
    "civilians_wolves",
    "create_roles_from_config",
    "ActionType",
    "Action",
    "Attack",
    "Protect",
    "Couple",
    "ProtectionGrant",
    "PlayerType",
    "PlayerProperties",
    "Player",
    "assign_roles",
    "GameMode",
    "GameConfig",
]
