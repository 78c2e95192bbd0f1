"""A sink that records every event for later inspection."""

from __future__ import annotations

from typing import Any

from restdsl.emitter.base import MISSING, CodeEmitter


class RecordingEmitter(CodeEmitter):
    """Keep emitted events as ``(event, value)`` tuples, in call order.

    Bare markers are stored with :data:`~restdsl.emitter.base.MISSING` as
    their value. Used by the ``events`` output format and throughout the
    test suite.

    Example::

        recorder = RecordingEmitter()
        recorder.emit("param").emit("name", "limit").emit("endParam")
        recorder.names()  # ["param", "name", "endParam"]
    """

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def emit(self, event: str, value: Any = MISSING) -> RecordingEmitter:  # noqa: ANN401
        self.events.append((event, value))
        return self

    def names(self) -> list[str]:
        """Return the event names only."""
        return [event for event, _ in self.events]

    def values(self, event: str) -> list[Any]:
        """Return every value emitted under *event*."""
        return [value for name, value in self.events if name == event]

    def clear(self) -> None:
        self.events.clear()

    def to_records(self) -> list[dict[str, Any]]:
        """Return the events as JSON-friendly dicts.

        Enum values are reduced to their string value and bare markers omit
        the ``value`` key.
        """
        records: list[dict[str, Any]] = []
        for event, value in self.events:
            record: dict[str, Any] = {"event": event}
            if value is not MISSING:
                record["value"] = getattr(value, "value", value)
            records.append(record)
        return records
