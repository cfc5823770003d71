"""Pydantic v2 logger configuration model."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, field_validator

from monolog.level import Level
from monolog.utils.validators import normalize_paths

ENCODINGS = ("json", "console")


class LoggerConfig(BaseModel):
    """Everything needed to build a sink. Assignments are re-validated."""

    level: Level = Level.INFO
    encoding: str = "json"
    disable_caller: bool = True
    disable_stacktrace: bool = True
    output_paths: List[str] = ["stdout"]
    error_output_paths: List[str] = ["stderr"]
    message_key: str = "msg"
    time_key: str = "ts"
    # None renders a UNIX epoch float, any other value is passed to TimeStamper
    time_format: Optional[str] = "iso"

    model_config = {"validate_assignment": True}

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v: object) -> Level:
        return Level.parse(v)  # type: ignore[arg-type]

    @field_validator("encoding")
    @classmethod
    def known_encoding(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ENCODINGS:
            raise ValueError(f"encoding must be one of {ENCODINGS}, got {v!r}")
        return v

    @field_validator("output_paths", "error_output_paths")
    @classmethod
    def non_empty_paths(cls, v: List[str]) -> List[str]:
        paths = normalize_paths(v)
        if not paths:
            raise ValueError("at least one output path is required")
        return paths

    @field_validator("message_key", "time_key")
    @classmethod
    def non_empty_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("key must not be empty")
        return v
