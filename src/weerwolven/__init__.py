"""Weerwolven - a moderator-driven werewolf party game engine."""

__version__ = "0.1.0"
