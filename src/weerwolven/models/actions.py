"""Night actions a role can perform.

Actions refer to players by name. They are created fresh every night,
consumed by the night resolution and then discarded.
"""

from enum import Enum
from typing import ClassVar, Optional, Sequence, TYPE_CHECKING
from pydantic import BaseModel, ConfigDict, field_validator

from weerwolven.models.roles import DeathCause

if TYPE_CHECKING:
    from weerwolven.engine.game_state import GameState


class ActionType(str, Enum):
    """Classification that decides how an action takes part in resolution.

    Only ATTACK actions can kill, only PROTECTION actions can block an
    attack, VISIT actions are never blocked and never kill.
    """

    ATTACK = "ATTACK"
    PROTECTION = "PROTECTION"
    VISIT = "VISIT"


class Action(BaseModel):
    """Base class for all night actions."""

    model_config = ConfigDict(frozen=True)

    action_type: ClassVar[ActionType]
    cause: ClassVar[Optional[DeathCause]] = None  # set by every attack kind

    performer: str
    targets: tuple[str, ...] = ()
    priority: int

    def transform(self, performer: str, targets: Sequence[str]) -> "Action":
        """Rebuild an equivalent action of the same kind with new participants."""
        return type(self)(
            **{
                **self.model_dump(),
                "performer": performer,
                "targets": tuple(targets),
            }
        )

    def execute(self, state: "GameState") -> None:
        """Apply the action's immediate effects. Attacks are applied by resolution."""
        pass

    def __str__(self) -> str:
        targets = ", ".join(self.targets) if self.targets else "nobody"
        return f"{type(self).__name__}({self.performer} -> {targets}, priority={self.priority})"


class Attack(Action):
    """Attack by the werewolves. Should only have one target."""

    action_type: ClassVar[ActionType] = ActionType.ATTACK
    cause: ClassVar[DeathCause] = DeathCause.WEREWOLF_ATTACK

    priority: int = 1


class Protect(Action):
    """Guard's protection over a player for one night."""

    action_type: ClassVar[ActionType] = ActionType.PROTECTION

    blocks: frozenset[ActionType] = frozenset({ActionType.ATTACK})


class Couple(Action):
    """Cupid binds two players as lovers."""

    action_type: ClassVar[ActionType] = ActionType.VISIT

    priority: int = 2

    @field_validator("targets")
    @classmethod
    def _two_distinct_lovers(cls, targets: tuple[str, ...]) -> tuple[str, ...]:
        if len(targets) != 2 or targets[0] == targets[1]:
            raise ValueError(f"A couple needs two distinct lovers, got {targets}")
        return targets

    @property
    def lovers(self) -> tuple[str, str]:
        first, second = self.targets
        return first, second

    def execute(self, state: "GameState") -> None:
        """Bind the lovers to each other. Any earlier partner is released,
        so every bond stays mutual."""
        first, second = self.lovers
        for lover, partner in ((first, second), (second, first)):
            properties = state.get_player(lover).properties
            previous = properties.in_love_with
            if previous is not None and previous != partner:
                former = state.get_player(previous).properties
                if former.in_love_with == lover:
                    former.in_love_with = None
            properties.in_love_with = partner


class ProtectionGrant(BaseModel):
    """Records which action types a protection blocks and at what priority."""

    model_config = ConfigDict(frozen=True)

    priority: int
    blocks: frozenset[ActionType] = frozenset({ActionType.ATTACK})
    granted_by: Optional[str] = None
