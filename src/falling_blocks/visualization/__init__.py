"""Pygame front end: rendering, input wiring and the gravity/key-repeat timers."""

from .timers import KeyRepeater, RepeatTimer

__all__ = ["KeyRepeater", "RepeatTimer"]
