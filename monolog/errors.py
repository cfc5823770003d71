"""Exceptions raised while constructing a logger."""

from __future__ import annotations


class ConstructionError(Exception):
    """A logger could not be built; no partially configured logger exists."""


class OptionsError(ConstructionError):
    """An option function failed while configuring a new logger."""


class SinkBuildError(ConstructionError):
    """The output sink could not be built from the final configuration."""
