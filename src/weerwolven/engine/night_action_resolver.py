"""Night action resolution - computes final deaths from the night's actions."""

import logging
from typing import Sequence

from pydantic import BaseModel, Field, SerializeAsAny

from weerwolven.engine.game_state import GameState
from weerwolven.errors import UnhandledDeathCauseError
from weerwolven.models.actions import Action, ActionType, ProtectionGrant
from weerwolven.models.roles import DeathCause

logger = logging.getLogger(__name__)


class NightResolution(BaseModel):
    """Outcome of resolving one night.

    actions: every action of the night, attacks replaced by their pruned copy
    pruned: index into actions -> targets removed from that attack
    protections: target name -> strongest protection granted tonight
    deaths: the will-die set with the attributed cause, before chained deaths
    """

    actions: list[SerializeAsAny[Action]] = Field(default_factory=list)
    pruned: dict[int, list[str]] = Field(default_factory=dict)
    protections: dict[str, ProtectionGrant] = Field(default_factory=dict)
    deaths: dict[str, DeathCause] = Field(default_factory=dict)


class NightActionResolver:
    """Computes the will-die set from one night's actions.

    Resolution order:
    1. Protections register the strongest priority offered per target
       and blocked action type
    2. Attacks lose every target protected at a strictly higher priority
       (ties favor the attacker); an attack left without targets is kept
    3. Surviving attack targets die once, attributed to the highest
       priority attack (first collected on a tie)

    Visit actions take no part; the scheduler executes them unconditionally.
    The resolver never mutates the game state.
    """

    def resolve(self, state: GameState, actions: Sequence[Action]) -> NightResolution:
        """Compute the will-die set from the night's actions.

        Args:
            state: Current game state, used to skip targets already dead.
            actions: Every action collected for this night, in collection order.

        Returns:
            NightResolution with pruned actions, protections and deaths.
        """
        protections, blocking = self._collect_protections(actions)

        resolved: list[Action] = []
        pruned: dict[int, list[str]] = {}
        for index, action in enumerate(actions):
            if action.action_type != ActionType.ATTACK:
                resolved.append(action)
                continue

            kept, removed = self._prune(action, blocking)
            resolved.append(action.transform(action.performer, kept))
            if removed:
                pruned[index] = removed
                logger.debug("%s lost protected targets %s", action, removed)

        deaths = self._will_die(state, resolved)
        return NightResolution(
            actions=resolved,
            pruned=pruned,
            protections=protections,
            deaths=deaths,
        )

    def _collect_protections(
        self,
        actions: Sequence[Action],
    ) -> tuple[dict[str, ProtectionGrant], dict[str, dict[ActionType, ProtectionGrant]]]:
        """Collect tonight's protections.

        Returns:
            Tuple of (strongest grant per target, strongest grant per target
            and blocked action type). A stronger grant that blocks nothing
            never hides a weaker one that does.
        """
        strongest: dict[str, ProtectionGrant] = {}
        blocking: dict[str, dict[ActionType, ProtectionGrant]] = {}
        for action in actions:
            if action.action_type != ActionType.PROTECTION:
                continue
            blocks = getattr(action, "blocks", frozenset({ActionType.ATTACK}))
            grant = ProtectionGrant(
                priority=action.priority,
                blocks=blocks,
                granted_by=action.performer,
            )
            for target in action.targets:
                current = strongest.get(target)
                if current is None or grant.priority > current.priority:
                    strongest[target] = grant

                by_type = blocking.setdefault(target, {})
                for blocked in blocks:
                    current = by_type.get(blocked)
                    if current is None or grant.priority > current.priority:
                        by_type[blocked] = grant
        return strongest, blocking

    def _prune(
        self,
        attack: Action,
        blocking: dict[str, dict[ActionType, ProtectionGrant]],
    ) -> tuple[list[str], list[str]]:
        """Split an attack's targets into (kept, removed)."""
        kept: list[str] = []
        removed: list[str] = []
        for target in attack.targets:
            grant = blocking.get(target, {}).get(attack.action_type)
            if grant is not None and grant.priority > attack.priority:
                removed.append(target)
            else:
                kept.append(target)
        return kept, removed

    def _will_die(self, state: GameState, actions: Sequence[Action]) -> dict[str, DeathCause]:
        """Union of remaining attack targets, each attributed to one attack."""
        attacks = [a for a in actions if a.action_type == ActionType.ATTACK]
        # sorted() is stable, so equal priorities keep collection order
        attacks = sorted(attacks, key=lambda a: -a.priority)

        deaths: dict[str, DeathCause] = {}
        for attack in attacks:
            if attack.cause is None:
                raise UnhandledDeathCauseError(
                    f"{type(attack).__name__} is an attack without a death cause"
                )
            for target in attack.targets:
                if target in deaths or not state.is_alive(target):
                    continue
                deaths[target] = attack.cause
        return deaths
