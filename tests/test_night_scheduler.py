"""Tests for NightScheduler: collecting, executing and resolving one night."""

import pytest

from weerwolven.ai.stub_ai import ScriptedSelector
from weerwolven.engine.event_collector import EventCollector
from weerwolven.engine.game_state import GameState
from weerwolven.engine.night_scheduler import NightScheduler
from weerwolven.engine.validator import CollectingValidator
from weerwolven.events.game_events import NightAction, NightOutcome
from weerwolven.handlers.base import NightHandler
from weerwolven.handlers.cupid_handler import CupidHandler
from weerwolven.models import ActionType, DeathCause, GameMode, Role, assign_roles


def create_state() -> GameState:
    names = ["wolf", "cupid", "guard", "anna", "bram"]
    roles = [Role.WEREWOLF, Role.CUPID, Role.GUARD, Role.CIVILIAN, Role.CIVILIAN]
    return GameState(players=assign_roles(names, roles))


def start_night(state: GameState, collector: EventCollector) -> None:
    state.advance()
    collector.create_phase_log(state.daypart, state.date)


class TestNightOrder:
    """Tests for how roles are asked."""

    @pytest.mark.asyncio
    async def test_roles_asked_by_priority(self):
        state = create_state()
        collector = EventCollector()
        start_night(state, collector)
        selector = ScriptedSelector(["anna", "bram", "guard", "anna"])

        await NightScheduler().run_night(state, selector, collector)

        prompts = [call["prompt"] for call in selector.calls]
        assert "cupid (Cupid)" in prompts[0]
        assert "cupid (Cupid)" in prompts[1]
        assert "guard (Guard)" in prompts[2]
        assert "werewolves" in prompts[3]
        assert selector.remaining == []

    @pytest.mark.asyncio
    async def test_wolves_cannot_target_wolves(self):
        state = create_state()
        collector = EventCollector()
        start_night(state, collector)
        selector = ScriptedSelector(["anna", "bram", "guard", "wolf", "ghost", "cupid"])

        deaths = await NightScheduler().run_night(state, selector, collector)

        assert "wolf" not in selector.calls[3]["candidates"]
        assert "cannot be chosen" in selector.calls[4]["hint"]
        assert "no player called 'ghost'" in selector.calls[5]["hint"]
        assert deaths == {"cupid": DeathCause.WEREWOLF_ATTACK}

    @pytest.mark.asyncio
    async def test_dead_players_do_not_act(self):
        state = create_state()
        state.kill("guard", DeathCause.LYNCHED)
        state.kill("cupid", DeathCause.LYNCHED)
        collector = EventCollector()
        start_night(state, collector)
        selector = ScriptedSelector(["anna"])

        deaths = await NightScheduler().run_night(state, selector, collector)

        assert len(selector.calls) == 1
        assert deaths == {"anna": DeathCause.WEREWOLF_ATTACK}


class TestNightOutcome:
    """Tests for the outcome of a night."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode", [GameMode.SEQUENTIAL, GameMode.CONCURRENT])
    async def test_lovers_die_together(self, mode):
        state = create_state()
        collector = EventCollector()
        start_night(state, collector)
        selector = ScriptedSelector(["anna", "bram", "guard", "anna"])

        deaths = await NightScheduler(mode=mode).run_night(state, selector, collector)

        assert deaths == {"anna": DeathCause.WEREWOLF_ATTACK, "bram": DeathCause.LOVER_DIED}
        assert state.get_player("anna").properties.in_love_with == "bram"
        assert state.get_player("bram").properties.in_love_with == "anna"

    @pytest.mark.asyncio
    async def test_guard_saves_target(self):
        state = create_state()
        collector = EventCollector()
        start_night(state, collector)
        selector = ScriptedSelector(["anna", "bram", "cupid", "cupid"])

        deaths = await NightScheduler().run_night(state, selector, collector)

        assert deaths == {}
        assert state.get_player("cupid").properties.protection.granted_by == "guard"

        attack = [e for e in collector.get_events() if isinstance(e, NightAction)
                  and e.action_type == ActionType.ATTACK][0]
        assert attack.targets == []
        assert attack.pruned_targets == ["cupid"]

    @pytest.mark.asyncio
    async def test_cupid_acts_once(self):
        state = create_state()
        collector = EventCollector()
        scheduler = NightScheduler()

        start_night(state, collector)
        await scheduler.run_night(state, ScriptedSelector(["anna", "bram", "anna", "anna"]), collector)
        assert state.get_player("cupid").properties.remaining_actions == 0
        assert state.get_player("guard").properties.remaining_actions is None

        state.advance()
        start_night(state, collector)
        selector = ScriptedSelector(["guard", "anna"])
        await scheduler.run_night(state, selector, collector)

        assert not any("Cupid" in call["prompt"] for call in selector.calls)

    @pytest.mark.asyncio
    async def test_protection_lasts_one_night(self):
        state = create_state()
        collector = EventCollector()
        scheduler = NightScheduler()

        start_night(state, collector)
        await scheduler.run_night(state, ScriptedSelector(["anna", "bram", "cupid", "cupid"]), collector)
        assert state.get_player("cupid").properties.protection is not None

        state.advance()
        start_night(state, collector)
        deaths = await scheduler.run_night(state, ScriptedSelector(["guard", "cupid"]), collector)

        assert deaths == {"cupid": DeathCause.WEREWOLF_ATTACK}

    @pytest.mark.asyncio
    async def test_events_recorded(self):
        state = create_state()
        collector = EventCollector()
        start_night(state, collector)
        validator = CollectingValidator()

        await NightScheduler(validator=validator).run_night(
            state, ScriptedSelector(["anna", "bram", "guard", "anna"]), collector
        )

        events = collector.get_events()
        kinds = [e.kind for e in events if isinstance(e, NightAction)]
        assert kinds == ["Couple", "Protect", "Attack"]
        assert isinstance(events[-1], NightOutcome)
        assert validator.get_violations() == []


class TestCupidPairing:
    """Tests for CupidHandler with more than one Cupid."""

    @pytest.mark.asyncio
    async def test_lovers_cannot_be_paired_twice(self):
        names = ["wolf", "amor", "eros", "anna", "bram", "cees", "daan"]
        roles = [Role.WEREWOLF, Role.CUPID, Role.CUPID] + [Role.CIVILIAN] * 4
        state = GameState(players=assign_roles(names, roles))
        state.advance()
        selector = ScriptedSelector(["anna", "bram", "anna", "cees", "daan"])

        actions = await CupidHandler()(state, state.living_with_role(Role.CUPID), selector)

        assert [a.targets for a in actions] == [("anna", "bram"), ("cees", "daan")]
        assert "anna" not in selector.calls[2]["candidates"]
        assert "bram" not in selector.calls[2]["candidates"]
        assert "cannot be chosen" in selector.calls[3]["hint"]

    @pytest.mark.asyncio
    async def test_bound_players_are_not_offered(self):
        state = create_state()
        state.get_player("anna").properties.in_love_with = "bram"
        state.get_player("bram").properties.in_love_with = "anna"
        state.advance()
        selector = ScriptedSelector(["wolf", "guard"])

        actions = await CupidHandler()(state, state.living_with_role(Role.CUPID), selector)

        assert actions[0].targets == ("wolf", "guard")
        assert set(selector.calls[0]["candidates"]) == {"wolf", "cupid", "guard"}

    @pytest.mark.asyncio
    async def test_cupid_skips_without_free_players(self):
        state = create_state()
        for name in ["wolf", "guard", "anna", "bram"]:
            state.kill(name, DeathCause.NATURAL)
        state.advance()
        selector = ScriptedSelector([])

        actions = await CupidHandler()(state, state.living_with_role(Role.CUPID), selector)

        assert actions == []
        assert selector.calls == []


class TestNightHandlerBase:
    """Tests for the NightHandler base class."""

    def test_handler_must_implement_call(self):
        class SilentHandler(NightHandler):
            role = Role.CIVILIAN

        with pytest.raises(TypeError):
            SilentHandler()
