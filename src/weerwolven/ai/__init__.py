"""AI selectors that make choices without human input."""

from .stub_ai import StubSelector, ScriptedSelector, create_stub_selector

__all__ = [
    "StubSelector",
    "ScriptedSelector",
    "create_stub_selector",
]
