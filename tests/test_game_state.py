"""Tests for GameState: deaths, the clock, the mayor and win checks."""

import pytest

from weerwolven.engine.game_state import GameState
from weerwolven.engine.night_action_resolver import NightResolution
from weerwolven.errors import UnhandledDeathCauseError, UnknownPlayerError
from weerwolven.models import (
    Couple,
    Daypart,
    DeathCause,
    ProtectionGrant,
    Role,
    assign_roles,
)


def create_state(*roles: Role) -> GameState:
    """Players are named p0, p1, ... in seat order."""
    names = [f"p{i}" for i in range(len(roles))]
    return GameState(players=assign_roles(names, list(roles)))


def couple(state: GameState, first: str, second: str) -> None:
    state.get_player(first).properties.in_love_with = second
    state.get_player(second).properties.in_love_with = first


class TestRoster:
    """Tests for roster lookups."""

    def test_unknown_player(self):
        state = create_state(Role.CIVILIAN)
        with pytest.raises(UnknownPlayerError):
            state.get_player("nobody")
        with pytest.raises(KeyError):
            state.kill("nobody", DeathCause.LYNCHED)

    def test_living_players_in_seat_order(self):
        state = create_state(Role.CIVILIAN, Role.WEREWOLF, Role.GUARD)
        state.kill("p1", DeathCause.LYNCHED)

        assert [p.name for p in state.living_players] == ["p0", "p2"]
        assert [p.name for p in state.dead_players] == ["p1"]
        assert state.living_with_role(Role.GUARD)[0].name == "p2"


class TestClock:
    """Tests for the Daypart/date clock."""

    def test_starts_on_day_zero(self):
        state = create_state(Role.CIVILIAN)
        assert (state.daypart, state.date) == (Daypart.DAY, 0)

    def test_date_increments_on_nightfall(self):
        state = create_state(Role.CIVILIAN)
        seen = []
        for _ in range(4):
            state.advance()
            seen.append((state.daypart, state.date))

        assert seen == [
            (Daypart.NIGHT, 1),
            (Daypart.DAY, 1),
            (Daypart.NIGHT, 2),
            (Daypart.DAY, 2),
        ]

    def test_actors(self):
        state = create_state(Role.WEREWOLF, Role.CIVILIAN, Role.CUPID)
        assert state.actors() == []

        state.advance()
        assert [p.name for p in state.actors()] == ["p0", "p2"]


class TestKill:
    """Tests for deaths and the lover chain."""

    def test_kill_marks_dead_and_reveals(self):
        state = create_state(Role.WEREWOLF, Role.CIVILIAN)
        deaths = state.kill("p0", DeathCause.LYNCHED)

        player = state.get_player("p0")
        assert deaths == [("p0", DeathCause.LYNCHED)]
        assert not player.is_alive
        assert not player.can_vote
        assert player.role_revealed

    def test_lover_dies_of_broken_heart(self):
        state = create_state(Role.CIVILIAN, Role.CIVILIAN, Role.WEREWOLF)
        couple(state, "p0", "p1")

        deaths = state.kill("p0", DeathCause.WEREWOLF_ATTACK)

        assert deaths == [
            ("p0", DeathCause.WEREWOLF_ATTACK),
            ("p1", DeathCause.LOVER_DIED),
        ]
        assert not state.is_alive("p1")
        assert state.get_player("p0").role_revealed
        assert state.get_player("p1").role_revealed

    def test_mutual_love_terminates(self):
        state = create_state(Role.CIVILIAN, Role.CIVILIAN)
        couple(state, "p0", "p1")

        deaths = state.kill("p1", DeathCause.LYNCHED)
        assert [name for name, _ in deaths] == ["p1", "p0"]

    def test_repairing_keeps_bonds_mutual(self):
        state = create_state(Role.CIVILIAN, Role.CIVILIAN, Role.CIVILIAN)
        Couple(performer="cupid", targets=("p0", "p1")).execute(state)
        Couple(performer="cupid", targets=("p0", "p2")).execute(state)

        assert state.get_player("p1").properties.in_love_with is None
        assert state.get_player("p2").properties.in_love_with == "p0"

        deaths = state.kill("p0", DeathCause.WEREWOLF_ATTACK)

        assert deaths == [
            ("p0", DeathCause.WEREWOLF_ATTACK),
            ("p2", DeathCause.LOVER_DIED),
        ]
        assert state.is_alive("p1")

    def test_natural_death_skips_hook_and_chain(self):
        state = create_state(Role.CIVILIAN, Role.CIVILIAN)
        couple(state, "p0", "p1")

        deaths = state.kill("p0", DeathCause.NATURAL)

        assert deaths == [("p0", DeathCause.NATURAL)]
        assert state.is_alive("p1")
        assert not state.get_player("p0").role_revealed

    def test_killing_the_dead_is_a_no_op(self):
        state = create_state(Role.CIVILIAN, Role.CIVILIAN)
        state.kill("p0", DeathCause.LYNCHED)
        assert state.kill("p0", DeathCause.WEREWOLF_ATTACK) == []

    def test_unknown_cause(self):
        state = create_state(Role.CIVILIAN)
        with pytest.raises(UnhandledDeathCauseError):
            state.kill("p0", "DROWNED")
        assert state.is_alive("p0")

    def test_lynch(self):
        state = create_state(Role.WEREWOLF, Role.CIVILIAN)
        assert state.lynch("p0") == {"p0": DeathCause.LYNCHED}


class TestNightResolutionApply:
    """Tests for apply_night_resolution."""

    def test_applies_deaths_with_chains(self):
        state = create_state(Role.CIVILIAN, Role.CIVILIAN, Role.WEREWOLF)
        couple(state, "p0", "p1")
        resolution = NightResolution(deaths={"p0": DeathCause.WEREWOLF_ATTACK})

        deaths = state.apply_night_resolution(resolution)

        assert deaths == {"p0": DeathCause.WEREWOLF_ATTACK, "p1": DeathCause.LOVER_DIED}

    def test_records_and_clears_protection(self):
        state = create_state(Role.GUARD, Role.CIVILIAN)
        grant = ProtectionGrant(priority=2, granted_by="p0")
        state.apply_night_resolution(NightResolution(protections={"p1": grant}))

        assert state.get_player("p1").properties.protection == grant

        state.clear_night_properties()
        assert state.get_player("p1").properties.protection is None


class TestMayor:
    """Tests for the mayor designation."""

    def test_needs_mayor_until_elected(self):
        state = create_state(Role.CIVILIAN, Role.WEREWOLF)
        assert state.needs_mayor()

        assert state.set_mayor("p0") is None
        assert not state.needs_mayor()
        assert state.get_player("p0").is_mayor

    def test_succession(self):
        state = create_state(Role.CIVILIAN, Role.WEREWOLF)
        state.set_mayor("p0")
        state.kill("p0", DeathCause.WEREWOLF_ATTACK)
        assert state.needs_mayor()

        assert state.set_mayor("p1") == "p0"
        assert not state.get_player("p0").is_mayor
        assert state.mayor == "p1"

    def test_dead_player_cannot_become_mayor(self):
        state = create_state(Role.CIVILIAN, Role.WEREWOLF)
        state.kill("p0", DeathCause.LYNCHED)
        with pytest.raises(ValueError):
            state.set_mayor("p0")

    def test_empty_village_needs_no_mayor(self):
        state = create_state(Role.CIVILIAN)
        state.kill("p0", DeathCause.LYNCHED)
        assert not state.needs_mayor()


class TestVictory:
    """Tests for the win checks."""

    def test_only_civilians_left(self):
        state = create_state(Role.CIVILIAN, Role.CIVILIAN, Role.GUARD)
        assert state.win_civilians()
        assert not state.win_wolves()
        assert state.winners() == ["p0", "p1", "p2"]

    def test_only_wolves_left(self):
        state = create_state(Role.WEREWOLF, Role.WEREWOLF, Role.WEREWOLF)
        assert state.win_wolves()
        assert not state.win_civilians()

    def test_mixed_village_plays_on(self):
        state = create_state(Role.WEREWOLF, Role.CIVILIAN, Role.CIVILIAN)
        assert not state.is_game_over()

    def test_winners_are_alive_only(self):
        state = create_state(Role.WEREWOLF, Role.CIVILIAN, Role.CIVILIAN)
        state.kill("p0", DeathCause.LYNCHED)
        state.kill("p1", DeathCause.WEREWOLF_ATTACK)

        assert state.win_civilians()
        assert state.winners() == ["p2"]

    def test_empty_village_satisfies_both(self):
        state = create_state(Role.WEREWOLF, Role.CIVILIAN)
        state.kill("p0", DeathCause.LYNCHED)
        state.kill("p1", DeathCause.LYNCHED)

        assert state.win_civilians()
        assert state.win_wolves()
        assert state.winners() == []
