"""Night action validators (R.1-R.2).

Rules:
- R.1: Every performer is alive and allowed to act tonight
- R.2: Every target is a known player
"""

from typing import Sequence, TYPE_CHECKING

from weerwolven.models.actions import Action
from .types import ValidationViolation

if TYPE_CHECKING:
    from weerwolven.engine.game_state import GameState


def validate_night_actions(
    actions: Sequence[Action],
    state: "GameState",
) -> list[ValidationViolation]:
    """Check the collected night actions before they are resolved."""
    violations: list[ValidationViolation] = []

    for action in actions:
        performer = state.players.get(action.performer)
        if performer is None or not performer.can_act(state.daypart, state.date):
            violations.append(ValidationViolation(
                rule_id="R.1",
                category="Night Actions",
                message=f"{action.performer} cannot perform {type(action).__name__} now",
                context={"date": state.date, "daypart": state.daypart.value},
            ))

        for target in action.targets:
            if target not in state.players:
                violations.append(ValidationViolation(
                    rule_id="R.2",
                    category="Night Actions",
                    message=f"{type(action).__name__} targets unknown player {target!r}",
                ))

    return violations
