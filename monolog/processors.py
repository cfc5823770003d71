"""Ready-made dynamic field producers for the ``extra`` object."""

from __future__ import annotations

import os
import socket
import threading
import uuid
from contextvars import ContextVar
from typing import Any, Optional

from monolog.fields import Field, Processor, any_, integer, skip, string


def static(key: str, value: Any) -> Processor:
    """Always produce the same field."""
    field = any_(key, value)

    def produce() -> Field:
        return field

    return produce


def hostname(key: str = "hostname") -> Processor:
    """Produce the machine's host name, resolved once."""
    field = string(key, socket.gethostname())
    return lambda: field


def process_id(key: str = "process_id") -> Processor:
    """Produce the current process id (re-read every call, so forks are seen)."""
    return lambda: integer(key, os.getpid())


def thread_name(key: str = "thread") -> Processor:
    return lambda: string(key, threading.current_thread().name)


def uid(length: int = 7, key: str = "uid") -> Processor:
    """Produce a random hex id generated once per producer.

    Attach one to a derived logger to correlate every record it writes.
    """
    if not 1 <= length <= 32:
        raise ValueError("uid length must be between 1 and 32")
    field = string(key, uuid.uuid4().hex[:length])
    return lambda: field


def context_var(var: ContextVar, key: Optional[str] = None) -> Processor:
    """Produce the current value of *var*, falling back to its own default.

    Omitted while the variable is unset and has no default.
    """
    name = key or var.name

    def produce() -> Field:
        try:
            value = var.get()
        except LookupError:
            return skip()
        return any_(name, value)

    return produce
