"""Emission Protocol sinks -- receive REST DSL events from the generator.

Typical usage::

    from restdsl.emitter import SourceEmitter

    emitter = SourceEmitter()
    RestDslGenerator(document).generate(emitter)
    print(emitter.render())

Sub-modules:

* :mod:`~restdsl.emitter.base` -- The :class:`CodeEmitter` contract and the
  :func:`is_empty` skip-if-empty predicate.
* :mod:`~restdsl.emitter.recording` -- Keeps raw ``(event, value)`` tuples.
* :mod:`~restdsl.emitter.source` -- Renders fluent DSL source text.
* :mod:`~restdsl.emitter.model` -- Builds route models and serialises them
  to YAML or JSON.
"""

from restdsl.emitter.base import MISSING, CodeEmitter, is_empty
from restdsl.emitter.model import RouteModelEmitter
from restdsl.emitter.recording import RecordingEmitter
from restdsl.emitter.source import SourceEmitter

__all__ = [
    "MISSING",
    "CodeEmitter",
    "is_empty",
    "RecordingEmitter",
    "RouteModelEmitter",
    "SourceEmitter",
]
