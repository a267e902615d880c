"""Game state management for the Weerwolven game."""

import logging
from typing import Optional, TYPE_CHECKING
from pydantic import BaseModel

from weerwolven.errors import UnhandledDeathCauseError, UnknownPlayerError
from weerwolven.models.player import Player
from weerwolven.models.roles import Daypart, DeathCause, Role, on_death, role_info

if TYPE_CHECKING:
    from weerwolven.engine.night_action_resolver import NightResolution

logger = logging.getLogger(__name__)


class GameState(BaseModel):
    """Represents the current state of the game.

    Owns the roster, the Daypart/date clock and the mayor designation.
    The clock starts at DAY 0 and the date only increments on DAY -> NIGHT.
    """

    players: dict[str, Player]  # name -> Player
    daypart: Daypart = Daypart.DAY
    date: int = 0
    mayor: Optional[str] = None

    # =========================================================================
    # Roster
    # =========================================================================

    def get_player(self, name: str) -> Player:
        """Get player by name.

        Raises:
            UnknownPlayerError: If no player has that name.
        """
        try:
            return self.players[name]
        except KeyError:
            raise UnknownPlayerError(name) from None

    def has_player(self, name: str) -> bool:
        return name in self.players

    def is_alive(self, name: str) -> bool:
        return self.get_player(name).is_alive

    @property
    def living_players(self) -> list[Player]:
        """Living players in seat order."""
        return sorted(
            (p for p in self.players.values() if p.is_alive),
            key=lambda p: p.seat,
        )

    @property
    def dead_players(self) -> list[Player]:
        return sorted(
            (p for p in self.players.values() if not p.is_alive),
            key=lambda p: p.seat,
        )

    def living_with_role(self, role: Role) -> list[Player]:
        return [p for p in self.living_players if p.role == role]

    def unassigned_players(self) -> list[str]:
        return [p.name for p in self.players.values() if p.role == Role.UNASSIGNED]

    # =========================================================================
    # Clock
    # =========================================================================

    def advance(self) -> None:
        """Move to the next half-turn: DAY(d) -> NIGHT(d+1) -> DAY(d+1)."""
        if self.daypart == Daypart.DAY:
            self.daypart = Daypart.NIGHT
            self.date += 1
        else:
            self.daypart = Daypart.DAY
        logger.debug("Clock advanced to %s %d", self.daypart.value, self.date)

    def actors(self) -> list[Player]:
        """Living players whose role may act right now."""
        return [p for p in self.living_players if p.can_act(self.daypart, self.date)]

    # =========================================================================
    # Deaths
    # =========================================================================

    def kill(self, name: str, cause: DeathCause) -> list[tuple[str, DeathCause]]:
        """Kill a player and every player whose death is chained to theirs.

        The player is marked dead before any cascade runs, so killing an
        already-dead player is a no-op and mutual love bonds terminate.
        NATURAL deaths skip the role hook and the lover chain.

        Returns:
            List of (name, cause) for every player that died, in order.

        Raises:
            UnknownPlayerError: If the name is not in the roster.
            UnhandledDeathCauseError: If the cause is not a known DeathCause.
        """
        if not isinstance(cause, DeathCause):
            raise UnhandledDeathCauseError(f"No handling for death cause {cause!r}")

        player = self.get_player(name)
        if not player.is_alive:
            return []

        player.is_alive = False
        player.can_vote = False
        deaths = [(name, cause)]
        logger.debug("%s dies (%s)", name, cause.value)

        if cause == DeathCause.NATURAL:
            return deaths

        on_death(player, cause)

        lover = player.properties.in_love_with
        if lover is not None:
            deaths.extend(self.kill(lover, DeathCause.LOVER_DIED))

        return deaths

    def apply_night_resolution(self, resolution: "NightResolution") -> dict[str, DeathCause]:
        """Record tonight's protection grants and kill everyone in the will-die set.

        Returns:
            Dict mapping name -> cause for every death, chained deaths included.
        """
        for name, grant in resolution.protections.items():
            if self.has_player(name):
                self.players[name].properties.protection = grant

        deaths: dict[str, DeathCause] = {}
        for name, cause in resolution.deaths.items():
            for dead, dead_cause in self.kill(name, cause):
                deaths.setdefault(dead, dead_cause)
        return deaths

    def lynch(self, name: str) -> dict[str, DeathCause]:
        """Lynch a player: an immediate, unconditional death."""
        return dict(self.kill(name, DeathCause.LYNCHED))

    def clear_night_properties(self) -> None:
        """Drop last night's protection grants."""
        for player in self.players.values():
            player.properties.protection = None

    # =========================================================================
    # Mayor
    # =========================================================================

    def set_mayor(self, name: str) -> Optional[str]:
        """Hand the mayor designation to a living player.

        Returns:
            The previous mayor's name, if any.
        """
        player = self.get_player(name)
        if not player.is_alive:
            raise ValueError(f"Dead player {name!r} cannot become mayor")

        previous = self.mayor
        if previous is not None:
            self.players[previous].is_mayor = False
        player.is_mayor = True
        self.mayor = name
        return previous

    def needs_mayor(self) -> bool:
        """True when there is no living mayor but someone is alive to take over."""
        if not self.living_players:
            return False
        return self.mayor is None or not self.players[self.mayor].is_alive

    # =========================================================================
    # Victory
    # =========================================================================

    def win_civilians(self) -> bool:
        """Civilians win when every living player is good (or neutral)."""
        return all(role_info(p.role).alignment.is_good for p in self.living_players)

    def win_wolves(self) -> bool:
        """Werewolves win when every living player is evil (or neutral)."""
        return all(role_info(p.role).alignment.is_evil for p in self.living_players)

    def is_game_over(self) -> bool:
        return self.win_civilians() or self.win_wolves()

    def winners(self) -> list[str]:
        """Living players on a side whose win condition holds.

        When both conditions hold (nobody alive, or only NEUTRAL players)
        both sides are unioned.
        """
        civilians_win = self.win_civilians()
        wolves_win = self.win_wolves()
        result = []
        for player in self.living_players:
            alignment = role_info(player.role).alignment
            if (civilians_win and alignment.is_good) or (wolves_win and alignment.is_evil):
                result.append(player.name)
        return result
