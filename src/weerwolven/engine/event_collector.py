"""EventCollector - accumulates events from handlers into a unified event log."""

from typing import Callable, Optional

from weerwolven.events.game_events import GameEvent, GameStart, GameOver, SubPhase
from weerwolven.events.event_log import GameEventLog, PhaseLog, SubPhaseLog
from weerwolven.models.roles import Daypart


class EventCollector:
    """Collects events from all handlers into a unified event log.

    The collector manages the hierarchy:
    - GameEventLog (top-level)
      - PhaseLog (DAY/NIGHT phases)
        - SubPhaseLog (micro-phases like NIGHT_ACTIONS, LYNCH)
          - GameEvent (individual events)

    Usage:
        collector = EventCollector()
        collector.create_phase_log(Daypart.NIGHT, date=1)
        collector.add_event(night_outcome)
        event_log = collector.get_event_log()

    The optional on_event callback is the announcement hook: it fires after
    each event is added.
    """

    def __init__(
        self,
        on_event: Optional[Callable[[GameEvent], None]] = None,
    ):
        self._event_log = GameEventLog(player_count=0)
        self._date = 0
        self._current_phase: Optional[Daypart] = None
        self._current_phase_log: Optional[PhaseLog] = None
        self._current_subphase_log: Optional[SubPhaseLog] = None
        self._on_event = on_event

    @property
    def date(self) -> int:
        return self._date

    def create_phase_log(self, phase: Daypart, date: int) -> None:
        """Start a new PhaseLog for the given half-turn."""
        self._date = date
        self._current_phase = phase
        self._current_subphase_log = None
        self._current_phase_log = PhaseLog(number=date, kind=phase)
        self._event_log.phases.append(self._current_phase_log)

    def add_event(self, event: GameEvent) -> None:
        """Add an event to the current phase's subphase log.

        Raises:
            RuntimeError: If no phase has been created yet.
        """
        if self._current_phase_log is None:
            raise RuntimeError("No phase has been created. Call create_phase_log() first.")

        if event.date == 0:
            event.date = self._date
        if event.phase is None:
            event.phase = self._current_phase

        subphase = event.micro_phase
        if subphase is None:
            subphase = (
                SubPhase.NIGHT_RESOLUTION if self._current_phase == Daypart.NIGHT else SubPhase.LYNCH
            )

        if self._current_subphase_log is None or self._current_subphase_log.micro_phase != subphase:
            self._current_subphase_log = SubPhaseLog(micro_phase=subphase)
            self._current_phase_log.subphases.append(self._current_subphase_log)

        self._current_subphase_log.events.append(event)

        if self._on_event is not None:
            self._on_event(event)

    def get_event_log(self) -> GameEventLog:
        return self._event_log

    def get_events(self) -> list[GameEvent]:
        """Flat list of all phase events in chronological order."""
        return self._event_log.get_events()

    def set_game_start(self, game_start: GameStart) -> None:
        self._event_log.player_count = game_start.player_count
        self._event_log.game_start = game_start
        self._event_log.roles_secret = game_start.roles_secret.copy()
        if self._on_event is not None:
            self._on_event(game_start)

    def set_game_over(self, game_over: GameOver) -> None:
        self._event_log.game_over = game_over
        if self._on_event is not None:
            self._on_event(game_over)
