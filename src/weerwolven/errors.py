"""Shared exceptions for the Weerwolven game.

Setup and logic errors are fatal and propagate out of the engine.
Invalid selections are never raised: the selection loop re-prompts instead.
"""


class WeerwolvenError(Exception):
    """Base class for all game errors."""

    pass


class UnknownPlayerError(WeerwolvenError, KeyError):
    """Raised when a player name does not exist in the roster."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown player: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class DuplicatePlayerError(WeerwolvenError, ValueError):
    """Raised when two players share a name at setup."""

    pass


class UnassignedRoleError(WeerwolvenError, RuntimeError):
    """Raised when the UNASSIGNED placeholder role is queried."""

    pass


class UnhandledDeathCauseError(WeerwolvenError, RuntimeError):
    """Raised when a death cause has no known handling."""

    pass


class NoEligiblePlayerError(WeerwolvenError):
    """Raised when a selection is requested but nobody is eligible."""

    pass
