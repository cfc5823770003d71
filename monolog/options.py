"""Option functions accepted by :func:`monolog.logger.new`.

Each option mutates the logger under construction and raises on invalid
input; ``new`` turns the first failure into an ``OptionsError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Union

from monolog.config import Settings, get_settings
from monolog.fields import Field, Processor
from monolog.level import Level

if TYPE_CHECKING:
    from monolog.logger import Logger

Option = Callable[["Logger"], None]


def with_level(level: Union[str, int, Level]) -> Option:
    """Set the initial threshold of the shared level gate."""

    def apply(logger: Logger) -> None:
        logger.config.level = level  # type: ignore[assignment]
        logger.level.set_level(logger.config.level)

    return apply


def with_output_paths(*paths: str) -> Option:
    """Write records to *paths* (``stdout``, ``stderr`` or files)."""

    def apply(logger: Logger) -> None:
        logger.config.output_paths = list(paths)

    return apply


def with_error_output_paths(*paths: str) -> Option:
    """Write the sink's own failures to *paths*."""

    def apply(logger: Logger) -> None:
        logger.config.error_output_paths = list(paths)

    return apply


def with_encoding(encoding: str) -> Option:
    def apply(logger: Logger) -> None:
        logger.config.encoding = encoding

    return apply


def with_caller(enabled: bool = True) -> Option:
    """Annotate records with the calling file, function and line."""

    def apply(logger: Logger) -> None:
        logger.config.disable_caller = not enabled

    return apply


def with_stacktrace(enabled: bool = True) -> Option:
    """Attach a stack trace to records at ERROR and above."""

    def apply(logger: Logger) -> None:
        logger.config.disable_stacktrace = not enabled

    return apply


def with_time_format(fmt: Optional[str]) -> Option:
    """``"iso"``, a strftime pattern, or ``None`` for UNIX epoch seconds."""

    def apply(logger: Logger) -> None:
        logger.config.time_format = fmt

    return apply


def with_processors(*processors: Processor) -> Option:
    """Register dynamic field producers, appended in order."""

    def apply(logger: Logger) -> None:
        for processor in processors:
            if not callable(processor):
                raise TypeError(f"processor must be callable, got {type(processor).__name__}")
        logger.processors.extend(processors)

    return apply


def with_initial_fields(*fields: Field) -> Option:
    """Fields attached to every record of the root logger and its children."""

    def apply(logger: Logger) -> None:
        for field in fields:
            if not isinstance(field, Field):
                raise TypeError(f"expected Field, got {type(field).__name__}")
        logger.context = (*logger.context, *fields)

    return apply


def from_settings(settings: Optional[Settings] = None) -> Option:
    """Apply ``MONOLOG_*`` environment settings (cached unless *settings* is given)."""

    def apply(logger: Logger) -> None:
        s = settings or get_settings()
        config = logger.config
        config.level = s.LEVEL  # type: ignore[assignment]
        config.encoding = s.ENCODING
        config.output_paths = s.output_paths
        config.error_output_paths = s.error_output_paths
        config.time_format = s.TIME_FORMAT
        config.disable_caller = not s.ENABLE_CALLER
        config.disable_stacktrace = not s.ENABLE_STACKTRACE
        logger.level.set_level(config.level)

    return apply
