"""State consistency validators (S.1-S.3).

Rules:
- S.1: A death only ever hits a player once
- S.2: The date advances by one exactly on DAY -> NIGHT
- S.3: Outside an empty village there is always a living mayor after succession
"""

from typing import Optional, TYPE_CHECKING

from weerwolven.models.roles import Daypart, DeathCause
from .types import ValidationViolation

if TYPE_CHECKING:
    from weerwolven.engine.game_state import GameState


def validate_deaths(
    deaths: dict[str, DeathCause],
    already_dead: set[str],
) -> list[ValidationViolation]:
    """S.1: deaths must only hit players that were alive before."""
    return [
        ValidationViolation(
            rule_id="S.1",
            category="State Consistency",
            message=f"{name} died again ({cause.value})",
        )
        for name, cause in deaths.items()
        if name in already_dead
    ]


def validate_phase_order(
    previous: Optional[tuple[Daypart, int]],
    current: tuple[Daypart, int],
) -> list[ValidationViolation]:
    """S.2: DAY(d) -> NIGHT(d+1) -> DAY(d+1)."""
    if previous is None:
        expected = (Daypart.DAY, 0)
    elif previous[0] == Daypart.DAY:
        expected = (Daypart.NIGHT, previous[1] + 1)
    else:
        expected = (Daypart.DAY, previous[1])

    if current == expected:
        return []
    return [ValidationViolation(
        rule_id="S.2",
        category="State Consistency",
        message=f"Expected {expected[0].value} {expected[1]}, got {current[0].value} {current[1]}",
    )]


def validate_mayor(state: "GameState") -> list[ValidationViolation]:
    """S.3: a living mayor exists whenever someone is alive."""
    if state.needs_mayor():
        return [ValidationViolation(
            rule_id="S.3",
            category="State Consistency",
            message=f"No living mayor on {state.daypart.value} {state.date}",
            context={"mayor": state.mayor},
        )]
    return []
