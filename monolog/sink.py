"""Structlog-backed sink: renders one record per call to the configured streams."""

from __future__ import annotations

import logging
import sys
from contextlib import ExitStack
from datetime import datetime, timezone
from typing import Any, Dict, List, Protocol, Sequence, TextIO

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

from monolog.fields import Field, encode_fields
from monolog.level import Level
from monolog.models import LoggerConfig
from monolog.utils.validators import is_standard_stream

# Frames from this package are skipped when resolving the caller.
_IGNORED_MODULES = ["monolog"]

_FilteringLogger = structlog.make_filtering_bound_logger(logging.DEBUG)


class Sink(Protocol):
    """What a Logger needs from the component that writes its records."""

    def with_fields(self, fields: Sequence[Field]) -> "Sink": ...

    def emit(self, level: Level, message: str, fields: Sequence[Field]) -> None: ...

    def report_error(self, message: str) -> None: ...

    def sync(self) -> None: ...

    def close(self) -> None: ...


class _Tee:
    """Minimal writable stream that fans out to several streams."""

    def __init__(self, streams: Sequence[TextIO]) -> None:
        self.streams = list(streams)

    def write(self, data: str) -> int:
        for stream in self.streams:
            stream.write(data)
        return len(data)

    def flush(self) -> None:
        for stream in self.streams:
            stream.flush()


class StructlogSink:
    """Writes records through a structlog bound logger.

    Bound fields are kept as a plain dict and handed to structlog as the
    logger's context, so any key is accepted. Top-level keys written by the
    processor chain (``level``, the time and message keys, and the caller
    and stack keys when enabled) replace bound fields of the same name.
    Instances derived with
    :meth:`with_fields` share the underlying streams, the error output and
    the file handles with their parent.
    """

    def __init__(
        self,
        printer: Any,
        processors: List[Any],
        config: LoggerConfig,
        streams: List[TextIO],
        error_output: TextIO,
        closer: ExitStack,
        context: Dict[str, Any] | None = None,
    ) -> None:
        self._printer = printer
        self._processors = processors
        self._config = config
        self._streams = streams
        self._error_output = error_output
        self._closer = closer
        self._context: Dict[str, Any] = context or {}

    def with_fields(self, fields: Sequence[Field]) -> "StructlogSink":
        return StructlogSink(
            self._printer,
            self._processors,
            self._config,
            self._streams,
            self._error_output,
            self._closer,
            {**self._context, **encode_fields(fields)},
        )

    def emit(self, level: Level, message: str, fields: Sequence[Field]) -> None:
        try:
            level = Level.parse(level)
            event = {**self._context, **encode_fields(fields)}
            if not self._config.disable_stacktrace and level >= Level.ERROR:
                event["stack_info"] = True
            bound = _FilteringLogger(self._printer, self._processors, event)
            getattr(bound, level.label)(message)
        except Exception as exc:
            # Logging is best effort: a failed write never reaches the caller.
            self.report_error(f"write error: {exc}")

    def report_error(self, message: str) -> None:
        ts = datetime.now(timezone.utc).isoformat()
        try:
            self._error_output.write(f"{ts} {message}\n")
            self._error_output.flush()
        except (OSError, ValueError):
            # The error output is the last resort; there is nowhere left to report.
            pass

    def sync(self) -> None:
        for stream in [*self._streams, self._error_output]:
            stream.flush()

    def close(self) -> None:
        """Flush, then close every file opened for this sink's hierarchy.

        ``stdout`` and ``stderr`` stay open. Later records are reported as
        write errors instead of raising.
        """
        try:
            self.sync()
        except (OSError, ValueError):
            pass
        self._closer.close()


# ── Construction ────────────────────────────────────────


def build_processors(config: LoggerConfig) -> list:
    """Assemble the structlog processor chain for *config*."""
    processors: list = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt=config.time_format, utc=True, key=config.time_key),
    ]
    if not config.disable_caller:
        processors.append(
            CallsiteParameterAdder(
                [
                    CallsiteParameter.FILENAME,
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                ],
                additional_ignores=_IGNORED_MODULES,
            )
        )
    if not config.disable_stacktrace:
        processors.append(structlog.processors.StackInfoRenderer(additional_ignores=_IGNORED_MODULES))

    if config.encoding == "console":
        # ConsoleRenderer lays the record out around the "event" key itself.
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.append(structlog.processors.EventRenamer(config.message_key))
        processors.append(structlog.processors.JSONRenderer())
    return processors


def open_stream(path: str) -> TextIO:
    """Resolve ``stdout``/``stderr`` or open *path* for appending."""
    if is_standard_stream(path):
        return sys.stdout if path.lower() == "stdout" else sys.stderr
    return open(path, "a", encoding="utf-8")


def _open_all(paths: Sequence[str], stack: ExitStack) -> List[TextIO]:
    """Open *paths*, registering every real file on *stack* for closing."""
    streams = []
    for path in paths:
        stream = open_stream(path)
        if not is_standard_stream(path):
            stack.enter_context(stream)
        streams.append(stream)
    return streams


def _combine(streams: List[TextIO]) -> TextIO:
    if len(streams) == 1:
        return streams[0]
    return _Tee(streams)  # type: ignore[return-value]


def build_sink(config: LoggerConfig) -> StructlogSink:
    """Build a sink from *config*.

    Raises ``OSError`` when an output path cannot be opened; files opened
    before the failure are closed again.
    """
    with ExitStack() as stack:
        streams = _open_all(config.output_paths, stack)
        error_output = _combine(_open_all(config.error_output_paths, stack))
        closer = stack.pop_all()

    printer = structlog.PrintLogger(file=_combine(streams))
    return StructlogSink(printer, build_processors(config), config, streams, error_output, closer)
