"""The Emission Protocol: an abstract sink for REST DSL events.

The generator never builds source text itself. It calls :meth:`CodeEmitter.emit`
once per DSL statement, in order, and the concrete sink decides what an event
means: :class:`~restdsl.emitter.recording.RecordingEmitter` keeps the raw
events, :class:`~restdsl.emitter.source.SourceEmitter` renders fluent DSL
text, and :class:`~restdsl.emitter.model.RouteModelEmitter` assembles route
models.

Events come in two shapes:

* bare markers such as ``emit("param")`` and ``emit("endParam")``;
* keyed events such as ``emit("name", "limit")`` whose value is a string,
  a boolean, a :class:`~restdsl.models.ParameterLocation`, a
  :class:`~restdsl.models.CollectionFormat`, a list of strings, or the
  opaque destination value.

Sinks never reject or rewrite values. The skip-if-empty rule is applied by
the caller through :func:`is_empty` before a keyed event is emitted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sized
from typing import Any


class _Missing:
    """Sentinel type marking a bare event (no value)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def is_empty(value: Any) -> bool:  # noqa: ANN401
    """Return ``True`` when *value* must not be emitted.

    ``None``, blank strings (empty or whitespace only), and empty sequences
    or mappings are empty. Booleans never are, so ``False`` is emitted like
    any other value.

    Example::

        >>> is_empty(None), is_empty("  "), is_empty([]), is_empty(False)
        (True, True, True, False)
    """
    if value is None or value is MISSING:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (Mapping, Sized)):
        return len(value) == 0
    return False


class CodeEmitter(ABC):
    """Abstract receiver of REST DSL events.

    Subclasses implement :meth:`emit`. Both event shapes go through the same
    method: a bare marker leaves *value* as :data:`MISSING`. ``emit`` returns
    the sink so calls can be chained; chaining carries no meaning beyond
    call order.

    Sinks are not thread-safe. Use one sink per thread.
    """

    @abstractmethod
    def emit(self, event: str, value: Any = MISSING) -> CodeEmitter:  # noqa: ANN401
        """Receive one event.

        Args:
            event: The DSL statement name, e.g. ``"get"``, ``"param"``,
                ``"dataType"``.
            value: The statement argument, or :data:`MISSING` for a bare
                marker.

        Returns:
            The sink itself.
        """
        ...
