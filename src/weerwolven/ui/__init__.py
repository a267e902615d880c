"""Console user interface."""

from .console import ConsoleSelector, ConsoleAnnouncer

__all__ = ["ConsoleSelector", "ConsoleAnnouncer"]
