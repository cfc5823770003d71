"""Typed structured fields and their conversion to a nested event dict."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional


class FieldType(Enum):
    UNKNOWN = "unknown"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ANY = "any"
    ERROR = "error"
    OBJECT = "object"
    NAMESPACE = "namespace"


class Field(NamedTuple):
    """A single structured field.

    The zero value ``Field()`` carries ``FieldType.UNKNOWN`` and is never
    written to a sink.
    """

    key: str = ""
    value: Any = None
    type: FieldType = FieldType.UNKNOWN

    @property
    def is_known(self) -> bool:
        return self.type is not FieldType.UNKNOWN


# A dynamic field producer: returns a Field, or None / skip() to be omitted.
Processor = Callable[[], Optional[Field]]


# ── Constructors ────────────────────────────────────────


def skip() -> Field:
    """Return the unknown field, which every sink silently drops."""
    return Field()


def string(key: str, value: str) -> Field:
    return Field(key, value, FieldType.STRING)


def integer(key: str, value: int) -> Field:
    return Field(key, value, FieldType.INTEGER)


def floating(key: str, value: float) -> Field:
    return Field(key, value, FieldType.FLOAT)


def boolean(key: str, value: bool) -> Field:
    return Field(key, value, FieldType.BOOLEAN)


def any_(key: str, value: Any) -> Field:
    """Field holding an arbitrary JSON-compatible value (dict, list, None...)."""
    return Field(key, value, FieldType.ANY)


def error(exc: Optional[BaseException], key: str = "error") -> Field:
    """Field holding ``str(exc)``; a ``None`` exception yields the unknown field."""
    if exc is None:
        return skip()
    return Field(key, exc, FieldType.ERROR)


def obj(key: str, fields: Iterable[Field]) -> Field:
    """Composite field rendered as a nested object of *fields*."""
    return Field(key, tuple(fields), FieldType.OBJECT)


def namespace(key: str) -> Field:
    """Open a nested object; every following field is written inside it."""
    return Field(key, None, FieldType.NAMESPACE)


# ── Encoding ────────────────────────────────────────────


def encode_fields(fields: Iterable[Field]) -> Dict[str, Any]:
    """Convert *fields* to a nested dict, honouring objects and namespaces.

    Unknown fields are skipped. A namespace with nothing after it still
    produces an empty object.
    """
    root: Dict[str, Any] = {}
    current = root
    for field in fields:
        if not isinstance(field, Field) or not field.is_known:
            continue
        if field.type is FieldType.NAMESPACE:
            nested: Dict[str, Any] = {}
            current[field.key] = nested
            current = nested
        elif field.type is FieldType.OBJECT:
            current[field.key] = encode_fields(field.value)
        elif field.type is FieldType.ERROR:
            current[field.key] = str(field.value)
        else:
            current[field.key] = field.value
    return root


def known(fields: Iterable[Field]) -> List[Field]:
    """Return the fields that are real Fields without the unknown type."""
    return [f for f in fields if isinstance(f, Field) and f.is_known]
