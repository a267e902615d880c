"""Event formatter for human-readable game announcements.

Formats game events with Name(Role) notation and narrative descriptions.
"""

from typing import Optional

from weerwolven.errors import UnhandledDeathCauseError
from weerwolven.models.roles import DeathCause, Role, role_info
from .game_events import (
    GameEvent,
    GameStart,
    NightAction,
    NightOutcome,
    MayorElection,
    Lynch,
    GameOver,
)


DEATH_DESCRIPTIONS: dict[DeathCause, str] = {
    DeathCause.NATURAL: "died of natural causes",
    DeathCause.LYNCHED: "was lynched by the village",
    DeathCause.WEREWOLF_ATTACK: "was eaten by the werewolves",
    DeathCause.LOVER_DIED: "died of a broken heart",
}


def describe_death(cause: DeathCause) -> str:
    """Narrative for a death cause.

    Raises:
        UnhandledDeathCauseError: If the cause has no known description.
    """
    try:
        return DEATH_DESCRIPTIONS[cause]
    except KeyError:
        raise UnhandledDeathCauseError(f"No handling for death cause {cause!r}") from None


class EventFormatter:
    """Format game events with Name(Role) notation.

    Takes a roles_secret mapping and produces human-readable strings like:
    - "Anna(Weerwolf) attacks Bert(Burger)"
    - "Bert(Burger) was eaten by the werewolves"
    """

    def __init__(self, roles_secret: Optional[dict[str, str]] = None):
        """Initialize formatter with role mapping.

        Args:
            roles_secret: Dict mapping player name to role value. Without it,
                          names are printed bare.
        """
        self.roles_secret = roles_secret or {}

    def format(self, event: GameEvent) -> str:
        """Format a single event with role context."""
        if isinstance(event, GameStart):
            return f"The game starts with {event.player_count} players."
        elif isinstance(event, NightAction):
            return self._format_night_action(event)
        elif isinstance(event, NightOutcome):
            return self._format_deaths("Night", event.date, event.deaths)
        elif isinstance(event, MayorElection):
            return self._format_mayor(event)
        elif isinstance(event, Lynch):
            return self._format_deaths("Day", event.date, event.deaths)
        elif isinstance(event, GameOver):
            return self._format_game_over(event)
        return str(event)

    def _name(self, name: str) -> str:
        role = self.roles_secret.get(name)
        if role is None:
            return name
        return f"{name}({role_info(Role(role)).display_name})"

    def _format_night_action(self, event: NightAction) -> str:
        targets = " and ".join(self._name(t) for t in event.targets) or "nobody"
        line = f"{self._name(event.actor)} {event.kind.lower()}: {targets}"
        if event.pruned_targets:
            protected = ", ".join(self._name(t) for t in event.pruned_targets)
            line += f" (protected: {protected})"
        return line

    def _format_deaths(self, label: str, date: int, deaths: dict[str, DeathCause]) -> str:
        if not deaths:
            return f"{label} {date}: nobody died."
        lines = [f"{label} {date}:"]
        for name, cause in deaths.items():
            lines.append(f"  {self._name(name)} {describe_death(cause)}")
        return "\n".join(lines)

    def _format_mayor(self, event: MayorElection) -> str:
        if event.previous:
            return f"{self._name(event.mayor)} succeeds {self._name(event.previous)} as mayor."
        return f"{self._name(event.mayor)} is elected mayor."

    def _format_game_over(self, event: GameOver) -> str:
        if event.civilians_win and event.wolves_win:
            side = "Both sides win"
        elif event.civilians_win:
            side = "The civilians win"
        elif event.wolves_win:
            side = "The werewolves win"
        else:
            return f"The game was stopped on date {event.final_date} without a winner."
        winners = ", ".join(self._name(w) for w in event.winners) or "nobody"
        return f"{side}! Winners: {winners}"
