"""Severity levels and the shared level gate."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Union


class Level(IntEnum):
    """Log severities, numerically aligned with the stdlib ``logging`` levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: Union[str, int, "Level"]) -> "Level":
        """Resolve a name (``"info"``, ``"WARN"``) or number to a ``Level``."""
        if isinstance(value, Level):
            return value
        if isinstance(value, int):
            return cls(value)
        name = value.strip().upper()
        name = _ALIASES.get(name, name)
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"unrecognized level: {value!r}") from None

    @classmethod
    def floor(cls, value: int) -> "Level":
        """Highest level not above *value*; anything below DEBUG is DEBUG."""
        candidates = [level for level in cls if level <= value]
        return candidates[-1] if candidates else cls.DEBUG

    @property
    def label(self) -> str:
        return self.name.lower()


_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL", "ERR": "ERROR"}


class AtomicLevel:
    """A mutable minimum level shared by reference across a logger hierarchy.

    Reads and writes are single attribute assignments, which the interpreter
    performs atomically, so emitting threads and administrative code may use
    it concurrently without extra locking.
    """

    __slots__ = ("_level",)

    def __init__(self, level: Union[str, int, Level] = Level.INFO) -> None:
        self._level = Level.parse(level)

    @property
    def level(self) -> Level:
        return self._level

    def set_level(self, level: Union[str, int, Level]) -> None:
        self._level = Level.parse(level)

    def enabled(self, candidate: Union[int, Level]) -> bool:
        """True when *candidate* is at or above the current threshold."""
        return candidate >= self._level

    def __repr__(self) -> str:
        return f"AtomicLevel({self._level.label!r})"
