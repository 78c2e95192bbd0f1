"""Render REST DSL events as fluent DSL source text.

:class:`SourceEmitter` turns the event stream into the chained-call form of
the REST DSL, one call per line::

    rest("/v1")
        .get("/pets")
            .id("listPets")
            .produces("application/json")
            .param()
                .name("limit")
                .type(RestParamType.query)
                .dataType("integer")
                .required(false)
            .endParam()
            .to("direct:listPets");

Indentation follows the block structure: top-level statements
(``restConfiguration``, ``rest``) start at column zero, verbs are nested one
level under ``rest``, verb fields two levels, and fields inside a
``param()`` block three. Each top-level statement ends with ``;``.
"""

from __future__ import annotations

import json
from typing import Any

from restdsl.emitter.base import MISSING, CodeEmitter
from restdsl.models import CollectionFormat, HttpMethod, ParameterLocation

_TOP_LEVEL_EVENTS = frozenset({"rest", "restConfiguration"})
_VERB_EVENTS = frozenset(m.value for m in HttpMethod)


def format_value(value: Any) -> str:  # noqa: ANN401
    """Render an event value as a DSL argument list (without parentheses).

    Example::

        >>> format_value(ParameterLocation.QUERY)
        'RestParamType.query'
        >>> format_value(["application/json", "application/xml"])
        '"application/json", "application/xml"'
    """
    if value is MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, ParameterLocation):
        return f"RestParamType.{value.value}"
    if isinstance(value, CollectionFormat):
        return f"CollectionFormat.{value.value}"
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(item) for item in value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return json.dumps(str(value), ensure_ascii=False)


class SourceEmitter(CodeEmitter):
    """Accumulate fluent DSL lines; :meth:`render` returns the text.

    Args:
        indent: The string used for one level of indentation.
    """

    def __init__(self, indent: str = "    ") -> None:
        self._indent = indent
        self._lines: list[str] = []
        self._in_verb = False
        self._in_param = False

    def emit(self, event: str, value: Any = MISSING) -> SourceEmitter:  # noqa: ANN401
        call = f"{event}({format_value(value)})"

        if event in _TOP_LEVEL_EVENTS:
            self._terminate()
            self._in_verb = False
            self._in_param = False
            self._lines.append(call)
            return self

        if event in _VERB_EVENTS:
            self._in_verb = True
            self._in_param = False
            self._add(1, call)
        elif event == "param":
            self._add(self._field_depth(), call)
            self._in_param = True
        elif event == "endParam":
            self._in_param = False
            self._add(self._field_depth(), call)
        else:
            self._add(self._field_depth(), call)
        return self

    def render(self) -> str:
        """Return the rendered source, each top-level statement terminated."""
        if not self._lines:
            return ""
        lines = list(self._lines)
        lines[-1] += ";"
        return "\n".join(lines) + "\n"

    def _field_depth(self) -> int:
        depth = 2 if self._in_verb else 1
        if self._in_param:
            depth += 1
        return depth

    def _add(self, depth: int, call: str) -> None:
        self._lines.append(f"{self._indent * depth}.{call}")

    def _terminate(self) -> None:
        if self._lines and not self._lines[-1].endswith(";"):
            self._lines[-1] += ";"
