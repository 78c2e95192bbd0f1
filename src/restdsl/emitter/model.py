"""Assemble REST DSL events into :class:`~restdsl.models.RestDefinition` models.

:class:`RouteModelEmitter` interprets the event stream structurally instead
of textually: a verb event opens a :class:`~restdsl.models.VerbDefinition`,
``param``/``endParam`` bracket a :class:`~restdsl.models.ParamDefinition`,
and keyed events fill fields of whichever definition is open. The finished
definition serialises to YAML (via PyYAML) or JSON with DSL field names
(``dataType``, ``allowableValues``, ...).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import yaml

from restdsl.emitter.base import MISSING, CodeEmitter
from restdsl.models import (
    HttpMethod,
    ParamDefinition,
    RestConfiguration,
    RestDefinition,
    VerbDefinition,
)

logger = logging.getLogger(__name__)

_VERB_EVENTS = frozenset(m.value for m in HttpMethod)

_CONFIG_FIELDS = {
    "component": "component",
    "contextPath": "context_path",
    "apiContextPath": "api_context_path",
    "host": "host",
}

_VERB_FIELDS = {
    "id": "id",
    "description": "description",
    "consumes": "consumes",
    "produces": "produces",
}

_PARAM_FIELDS = {
    "name": "name",
    "type": "type",
    "dataType": "data_type",
    "allowableValues": "allowable_values",
    "collectionFormat": "collection_format",
    "defaultValue": "default_value",
    "arrayType": "array_type",
    "required": "required",
    "description": "description",
}


class RouteModelEmitter(CodeEmitter):
    """Build a :class:`~restdsl.models.RestDefinition` from emitted events.

    Events that do not apply to the currently open definition are logged at
    debug level and otherwise ignored.
    """

    def __init__(self) -> None:
        self.definition = RestDefinition()
        self._config: Optional[RestConfiguration] = None
        self._verb: Optional[VerbDefinition] = None
        self._param: Optional[ParamDefinition] = None

    def emit(self, event: str, value: Any = MISSING) -> RouteModelEmitter:  # noqa: ANN401
        if event == "restConfiguration":
            self._config = RestConfiguration()
            self.definition.configuration = self._config
        elif event == "rest":
            self._config = None
            self.definition.path = None if value is MISSING else str(value)
        elif event in _VERB_EVENTS:
            self._config = None
            self._param = None
            self._verb = VerbDefinition(method=HttpMethod(event), path=str(value))
            self.definition.verbs.append(self._verb)
        elif event == "param":
            self._param = ParamDefinition()
        elif event == "endParam":
            if self._verb is not None and self._param is not None:
                self._verb.params.append(self._param)
            self._param = None
        elif event == "to":
            if self._verb is not None:
                self._verb.to = str(value)
        elif self._param is not None and event in _PARAM_FIELDS:
            setattr(self._param, _PARAM_FIELDS[event], _plain(value))
        elif self._verb is not None and event in _VERB_FIELDS:
            setattr(self._verb, _VERB_FIELDS[event], _plain(value))
        elif self._config is not None and event in _CONFIG_FIELDS:
            setattr(self._config, _CONFIG_FIELDS[event], _plain(value))
        else:
            logger.debug("Ignoring event '%s' outside of a matching definition", event)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the definition as plain data with DSL field names."""
        return self.definition.model_dump(
            mode="json", by_alias=True, exclude_defaults=True
        )

    def to_yaml(self) -> str:
        return yaml.safe_dump({"rest": self.to_dict()}, sort_keys=False)

    def to_json(self) -> str:
        return json.dumps({"rest": self.to_dict()}, indent=2, ensure_ascii=False) + "\n"


def _plain(value: Any) -> Any:  # noqa: ANN401
    if isinstance(value, tuple):
        return list(value)
    return value
