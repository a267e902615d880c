"""GameValidator - runtime validation hooks for game rules.

Hooks are injected at key points in the game flow to catch violations early.

Usage:
    # In tests or development
    validator = CollectingValidator()
    game = WeerwolvenGame(players, selector, validator=validator)
    violations = validator.get_violations()

    # No overhead in production (validator=None)
    game = WeerwolvenGame(players, selector)
"""

from typing import Optional, Protocol, Sequence

from weerwolven.engine.game_state import GameState
from weerwolven.events.game_events import GameOver
from weerwolven.models.actions import Action
from weerwolven.models.roles import Daypart, DeathCause
from weerwolven.validation import (
    ValidationError,
    ValidationViolation,
    validate_deaths,
    validate_mayor,
    validate_night_actions,
    validate_phase_order,
    validate_victory,
)


class GameValidator(Protocol):
    """Hooks for runtime validation at key game points."""

    async def on_game_start(self, state: GameState) -> None:
        """Called once before Day 0."""
        ...

    async def on_phase_start(self, daypart: Daypart, date: int, state: GameState) -> None:
        """Called at the start of each DAY and NIGHT."""
        ...

    async def on_night_actions(self, actions: Sequence[Action], state: GameState) -> None:
        """Called with the collected actions, before resolution."""
        ...

    async def on_deaths(
        self,
        deaths: dict[str, DeathCause],
        previously_dead: set[str],
        state: GameState,
    ) -> None:
        """Called after deaths (with their chains) have been applied."""
        ...

    async def on_phase_end(self, daypart: Daypart, date: int, state: GameState) -> None:
        """Called when a phase completes without ending the game."""
        ...

    async def on_game_over(self, game_over: GameOver, state: GameState) -> list:
        """Called when the game ends. Returns all violations found."""
        ...


class NoOpValidator:
    """No-op validator for production use."""

    async def on_game_start(self, state: GameState) -> None:
        pass

    async def on_phase_start(self, daypart: Daypart, date: int, state: GameState) -> None:
        pass

    async def on_night_actions(self, actions: Sequence[Action], state: GameState) -> None:
        pass

    async def on_deaths(
        self,
        deaths: dict[str, DeathCause],
        previously_dead: set[str],
        state: GameState,
    ) -> None:
        pass

    async def on_phase_end(self, daypart: Daypart, date: int, state: GameState) -> None:
        pass

    async def on_game_over(self, game_over: GameOver, state: GameState) -> list:
        return []


class CollectingValidator(NoOpValidator):
    """Validator that collects violations for later inspection.

    Args:
        fail_fast: Raise ValidationError as soon as a violation is found.
    """

    def __init__(self, fail_fast: bool = False):
        self._violations: list[ValidationViolation] = []
        self._last_phase: Optional[tuple[Daypart, int]] = None
        self._fail_fast = fail_fast

    def get_violations(self) -> list[ValidationViolation]:
        return list(self._violations)

    def clear(self) -> None:
        self._violations.clear()
        self._last_phase = None

    def _record(self, violations: list[ValidationViolation]) -> None:
        self._violations.extend(violations)
        if violations and self._fail_fast:
            raise ValidationError(violations)

    async def on_phase_start(self, daypart: Daypart, date: int, state: GameState) -> None:
        current = (daypart, date)
        self._record(validate_phase_order(self._last_phase, current))
        self._last_phase = current

    async def on_night_actions(self, actions: Sequence[Action], state: GameState) -> None:
        self._record(validate_night_actions(actions, state))

    async def on_deaths(
        self,
        deaths: dict[str, DeathCause],
        previously_dead: set[str],
        state: GameState,
    ) -> None:
        self._record(validate_deaths(deaths, previously_dead))

    async def on_phase_end(self, daypart: Daypart, date: int, state: GameState) -> None:
        self._record(validate_mayor(state))

    async def on_game_over(self, game_over: GameOver, state: GameState) -> list:
        if game_over.civilians_win or game_over.wolves_win:
            self._record(validate_victory(game_over, state))
        return self.get_violations()


def create_validator(collect: bool = False):
    """Return a CollectingValidator for tests, NoOpValidator otherwise."""
    if collect:
        return CollectingValidator()
    return NoOpValidator()
