"""Victory validators (V.1-V.2).

Rules:
- V.1: A finished game's declared sides match the win predicates
- V.2: Every declared winner is alive and on a winning side
"""

from typing import TYPE_CHECKING

from weerwolven.events.game_events import GameOver
from weerwolven.models.roles import role_info
from .types import ValidationViolation

if TYPE_CHECKING:
    from weerwolven.engine.game_state import GameState


def validate_victory(game_over: GameOver, state: "GameState") -> list[ValidationViolation]:
    violations: list[ValidationViolation] = []

    civilians_win = state.win_civilians()
    wolves_win = state.win_wolves()
    if (game_over.civilians_win, game_over.wolves_win) != (civilians_win, wolves_win):
        violations.append(ValidationViolation(
            rule_id="V.1",
            category="Victory",
            message="Declared winning sides do not match the surviving players",
            context={
                "declared": [game_over.civilians_win, game_over.wolves_win],
                "actual": [civilians_win, wolves_win],
            },
        ))

    for name in game_over.winners:
        player = state.players.get(name)
        if player is None or not player.is_alive:
            violations.append(ValidationViolation(
                rule_id="V.2",
                category="Victory",
                message=f"Declared winner {name} is not a living player",
            ))
            continue
        alignment = role_info(player.role).alignment
        if not ((civilians_win and alignment.is_good) or (wolves_win and alignment.is_evil)):
            violations.append(ValidationViolation(
                rule_id="V.2",
                category="Victory",
                message=f"Declared winner {name} is not on a winning side",
            ))

    return violations
