"""The available audio sinks, looked up by name."""

from __future__ import annotations

from collections.abc import Callable

from ..config import AudioFormat
from .pipe import StdoutSink
from .sink import Sink
from .subprocess_sink import SubprocessSink

SinkBuilder = Callable[[str | None, AudioFormat], Sink]

BACKENDS: tuple[tuple[str, SinkBuilder], ...] = (
    (StdoutSink.NAME, StdoutSink),
    (SubprocessSink.NAME, SubprocessSink),
)


def find(name: str | None = None) -> SinkBuilder | None:
    """Return the builder of the named sink, or the default one when no name is given."""
    if name is None:
        return BACKENDS[0][1] if BACKENDS else None
    return next((builder for backend, builder in BACKENDS if backend == name), None)


def backend_names() -> list[str]:
    """Names of all available sinks, the default first."""
    return [name for name, _ in BACKENDS]