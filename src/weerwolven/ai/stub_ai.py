"""Stub selectors for testing and AI-only games.

These make valid choices without any human input. Useful for:
- Integration tests (full game flow with scripted choices)
- Simulations and stress runs (seeded random choices)
"""

import random
from collections import deque
from typing import Iterable, Optional, Sequence


class StubSelector:
    """Picks a random candidate. The same seed gives the same choices."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    async def select(
        self,
        prompt: str,
        candidates: Sequence[str],
        hint: Optional[str] = None,
    ) -> str:
        return self._rng.choice(list(candidates))


class ScriptedSelector:
    """Returns scripted answers in order, recording every call.

    Answers are returned verbatim, so a script may contain invalid names to
    exercise re-prompting.

    Raises:
        LookupError: If asked for more answers than were scripted.
    """

    def __init__(self, answers: Iterable[str]):
        self._answers = deque(answers)
        self.calls: list[dict] = []

    @property
    def remaining(self) -> list[str]:
        return list(self._answers)

    async def select(
        self,
        prompt: str,
        candidates: Sequence[str],
        hint: Optional[str] = None,
    ) -> str:
        self.calls.append({
            "prompt": prompt,
            "candidates": list(candidates),
            "hint": hint,
        })
        if not self._answers:
            raise LookupError(f"Script exhausted at prompt: {prompt}")
        return self._answers.popleft()


def create_stub_selector(seed: Optional[int] = None) -> StubSelector:
    return StubSelector(seed=seed)
