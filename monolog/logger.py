"""Monolog-shaped structured logger.

Every record carries two nested objects: ``extra``, filled by the logger's
dynamic field producers at emission time, and ``context``, holding the
fields passed to the logging call::

    {"extra": {"foo": "bar"}, "context": {"hello": "world"}, "level": "info",
     "ts": "...", "msg": "hello world"}

Loggers derived with :meth:`Logger.with_fields` share the level gate and the
output streams with their parent but own a separate copy of the producer list.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

from monolog.errors import ConstructionError, OptionsError, SinkBuildError
from monolog.fields import Field, FieldType, Processor, known, namespace, obj
from monolog.level import AtomicLevel, Level
from monolog.models import LoggerConfig
from monolog.options import Option
from monolog.sink import Sink, build_sink


class _UnbuiltSink:
    """Stands in for the sink while options run; any use is an error."""

    def __getattr__(self, name: str):
        raise ConstructionError(f"logger is still being configured, cannot call {name}()")


class Logger:
    """A logger in a hierarchy sharing one :class:`AtomicLevel`."""

    def __init__(
        self,
        config: LoggerConfig,
        level: AtomicLevel,
        sink: Sink,
        processors: Optional[List[Processor]] = None,
        context: Tuple[Field, ...] = (),
    ) -> None:
        self.config = config
        self.level = level
        self.sink = sink
        self.processors: List[Processor] = processors if processors is not None else []
        self.context = context

    # ── Hierarchy ───────────────────────────────────

    def with_fields(self, *fields: Field) -> "Logger":
        """Create a child logger carrying *fields* on every record.

        The child shares the level gate with its parent; its producer list is
        a copy, so adding producers to either side does not affect the other.
        """
        return Logger(
            config=self.config.model_copy(),
            level=self.level,
            sink=self.sink.with_fields(fields),
            processors=[p for p in self.processors],
            context=(*self.context, *fields),
        )

    def add_processor(self, processor: Processor) -> None:
        self.processors.append(processor)

    # ── Level gate ──────────────────────────────────

    def enabled(self, level: Union[str, int, Level]) -> bool:
        return self.level.enabled(Level.parse(level))

    def set_level(self, level: Union[str, int, Level]) -> None:
        """Change the threshold for this logger and every related logger."""
        self.level.set_level(level)

    # ── Emission ────────────────────────────────────

    def _write(self, level: Level, msg: str, fields: Sequence[Field]) -> None:
        if not self.level.enabled(level):
            return

        extras: List[Field] = []
        for processor in tuple(self.processors):
            field = self._produce(processor)
            if field is not None:
                extras.append(field)

        ctx = [obj("extra", extras), namespace("context"), *known(fields)]
        self.sink.emit(level, msg, ctx)

    def _produce(self, processor: Processor) -> Optional[Field]:
        """Run one producer; None when it yields nothing usable or raises."""
        try:
            field = processor()
        except Exception as exc:
            name = getattr(processor, "__qualname__", repr(processor))
            self.sink.report_error(f"processor {name} failed: {exc!r}")
            return None
        if not isinstance(field, Field) or field.type is FieldType.UNKNOWN:
            return None
        return field

    def log(self, level: Union[str, int, Level], msg: str, *fields: Field) -> None:
        """Log at *level*.

        Custom numeric levels are rounded down to the nearest known level.
        An unrecognised level name is reported on the sink's error output and
        the record is dropped.
        """
        if isinstance(level, int) and not isinstance(level, Level):
            severity = Level.floor(level)
        else:
            try:
                severity = Level.parse(level)
            except ValueError as exc:
                self.sink.report_error(f"dropped record {msg!r}: {exc}")
                return
        self._write(severity, msg, fields)

    def debug(self, msg: str, *fields: Field) -> None:
        self._write(Level.DEBUG, msg, fields)

    def info(self, msg: str, *fields: Field) -> None:
        self._write(Level.INFO, msg, fields)

    def warning(self, msg: str, *fields: Field) -> None:
        self._write(Level.WARNING, msg, fields)

    warn = warning

    def error(self, msg: str, *fields: Field) -> None:
        self._write(Level.ERROR, msg, fields)

    def critical(self, msg: str, *fields: Field) -> None:
        self._write(Level.CRITICAL, msg, fields)

    def sync(self) -> None:
        """Flush every stream the sink writes to."""
        self.sink.sync()

    def close(self) -> None:
        """Flush and close the files this logger's hierarchy writes to.

        Every logger derived from the same root shares those files.
        """
        self.sink.close()


def new(*options: Option) -> Logger:
    """Build a root logger.

    Defaults: INFO threshold, JSON encoding, no caller or stack annotations,
    records to stdout and sink errors to stderr. *options* are applied in
    order; the first one that raises aborts construction before any output
    is opened.

    Raises
    ------
    OptionsError
        An option rejected its input.
    SinkBuildError
        The output streams could not be opened.
    """
    config = LoggerConfig()
    logger = Logger(config=config, level=AtomicLevel(config.level), sink=_UnbuiltSink())

    for option in options:
        try:
            option(logger)
        except Exception as exc:
            raise OptionsError(f"options function failed: {exc}") from exc

    logger.level.set_level(logger.config.level)
    try:
        sink = build_sink(logger.config)
    except Exception as exc:
        raise SinkBuildError(f"failed to build logger: {exc}") from exc

    logger.sink = sink.with_fields(logger.context) if logger.context else sink
    return logger
