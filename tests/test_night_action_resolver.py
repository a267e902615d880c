"""Tests for NightActionResolver.

Covers the protection pipeline:
- Protection only blocks at strictly higher priority
- Pruned attacks are kept even without targets
- Each target dies once, attributed to the strongest attack
- The resolver never mutates the game state
"""

from typing import ClassVar

import pytest

from weerwolven.engine.game_state import GameState
from weerwolven.engine.night_action_resolver import NightActionResolver
from weerwolven.errors import UnhandledDeathCauseError
from weerwolven.models import (
    Action,
    ActionType,
    Attack,
    Couple,
    DeathCause,
    Protect,
    Role,
    assign_roles,
)


def create_state() -> GameState:
    names = ["wolf", "guard", "anna", "bram", "cees"]
    roles = [Role.WEREWOLF, Role.GUARD, Role.CIVILIAN, Role.CIVILIAN, Role.CIVILIAN]
    state = GameState(players=assign_roles(names, roles))
    state.advance()
    return state


class Ambush(Action):
    """A stronger attack kind, for priority ordering."""

    action_type: ClassVar[ActionType] = ActionType.ATTACK
    cause: ClassVar[DeathCause] = DeathCause.NATURAL

    priority: int = 5


class Curse(Action):
    """An attack kind that forgot its death cause."""

    action_type: ClassVar[ActionType] = ActionType.ATTACK

    priority: int = 1


@pytest.fixture
def resolver():
    return NightActionResolver()


class TestProtection:
    """Tests for protection pruning."""

    def test_unprotected_target_dies(self, resolver):
        state = create_state()
        resolution = resolver.resolve(state, [Attack(performer="wolf", targets=("anna",))])
        assert resolution.deaths == {"anna": DeathCause.WEREWOLF_ATTACK}

    def test_higher_priority_protection_saves(self, resolver):
        state = create_state()
        actions = [
            Protect(performer="guard", targets=("anna",), priority=2),
            Attack(performer="wolf", targets=("anna",)),
        ]
        resolution = resolver.resolve(state, actions)

        assert resolution.deaths == {}
        assert resolution.pruned == {1: ["anna"]}
        assert resolution.protections["anna"].priority == 2
        assert resolution.protections["anna"].granted_by == "guard"

    def test_equal_priority_protection_fails(self, resolver):
        state = create_state()
        actions = [
            Protect(performer="guard", targets=("anna",), priority=1),
            Attack(performer="wolf", targets=("anna",)),
        ]
        resolution = resolver.resolve(state, actions)

        assert resolution.deaths == {"anna": DeathCause.WEREWOLF_ATTACK}
        assert resolution.pruned == {}

    def test_protection_only_covers_its_targets(self, resolver):
        state = create_state()
        actions = [
            Protect(performer="guard", targets=("bram",), priority=2),
            Attack(performer="wolf", targets=("anna",)),
        ]
        assert resolver.resolve(state, actions).deaths == {"anna": DeathCause.WEREWOLF_ATTACK}

    def test_strongest_protection_wins(self, resolver):
        state = create_state()
        actions = [
            Protect(performer="guard", targets=("anna",), priority=1),
            Protect(performer="cees", targets=("anna",), priority=3),
            Ambush(performer="wolf", targets=("anna",), priority=2),
        ]
        resolution = resolver.resolve(state, actions)

        assert resolution.deaths == {}
        assert resolution.protections["anna"].granted_by == "cees"

    def test_protection_ignores_unblocked_types(self, resolver):
        state = create_state()
        actions = [
            Protect(performer="guard", targets=("anna",), priority=9, blocks=frozenset()),
            Attack(performer="wolf", targets=("anna",)),
        ]
        assert resolver.resolve(state, actions).deaths == {"anna": DeathCause.WEREWOLF_ATTACK}

    def test_non_blocking_protection_does_not_hide_a_blocking_one(self, resolver):
        state = create_state()
        actions = [
            Protect(performer="guard", targets=("anna",), priority=2),
            Protect(performer="cees", targets=("anna",), priority=3, blocks=frozenset()),
            Attack(performer="wolf", targets=("anna",)),
        ]
        resolution = resolver.resolve(state, actions)

        assert resolution.deaths == {}
        assert resolution.pruned == {2: ["anna"]}
        assert resolution.protections["anna"].granted_by == "cees"

    def test_pruned_attack_is_kept_without_targets(self, resolver):
        state = create_state()
        actions = [
            Protect(performer="guard", targets=("anna",), priority=2),
            Attack(performer="wolf", targets=("anna",)),
        ]
        resolution = resolver.resolve(state, actions)

        assert len(resolution.actions) == 2
        kept = resolution.actions[1]
        assert isinstance(kept, Attack)
        assert kept.performer == "wolf"
        assert kept.targets == ()

    def test_partial_pruning(self, resolver):
        state = create_state()
        actions = [
            Protect(performer="guard", targets=("anna",), priority=2),
            Attack(performer="wolf", targets=("anna", "bram")),
        ]
        resolution = resolver.resolve(state, actions)

        assert resolution.actions[1].targets == ("bram",)
        assert resolution.pruned == {1: ["anna"]}
        assert resolution.deaths == {"bram": DeathCause.WEREWOLF_ATTACK}


class TestWillDie:
    """Tests for the will-die set."""

    def test_visits_never_kill(self, resolver):
        state = create_state()
        resolution = resolver.resolve(state, [Couple(performer="guard", targets=("anna", "bram"))])
        assert resolution.deaths == {}
        assert resolution.actions[0].targets == ("anna", "bram")

    def test_each_target_dies_once(self, resolver):
        state = create_state()
        actions = [
            Attack(performer="wolf", targets=("anna",)),
            Attack(performer="guard", targets=("anna", "bram")),
        ]
        resolution = resolver.resolve(state, actions)
        assert resolution.deaths == {
            "anna": DeathCause.WEREWOLF_ATTACK,
            "bram": DeathCause.WEREWOLF_ATTACK,
        }

    def test_strongest_attack_gets_the_kill(self, resolver):
        state = create_state()
        actions = [
            Attack(performer="wolf", targets=("anna",)),
            Ambush(performer="cees", targets=("anna",)),
        ]
        assert resolver.resolve(state, actions).deaths == {"anna": DeathCause.NATURAL}

    def test_dead_targets_are_skipped(self, resolver):
        state = create_state()
        state.kill("anna", DeathCause.LYNCHED)
        resolution = resolver.resolve(state, [Attack(performer="wolf", targets=("anna",))])
        assert resolution.deaths == {}

    def test_attack_without_cause(self, resolver):
        state = create_state()
        with pytest.raises(UnhandledDeathCauseError):
            resolver.resolve(state, [Curse(performer="wolf", targets=("anna",))])

    def test_state_is_not_mutated(self, resolver):
        state = create_state()
        before = state.model_dump()
        actions = [
            Protect(performer="guard", targets=("bram",), priority=2),
            Attack(performer="wolf", targets=("anna",)),
            Couple(performer="guard", targets=("anna", "cees")),
        ]
        resolver.resolve(state, actions)
        assert state.model_dump() == before

    def test_empty_night(self, resolver):
        resolution = resolver.resolve(create_state(), [])
        assert resolution.actions == []
        assert resolution.deaths == {}
