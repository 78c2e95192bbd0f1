"""Emit the REST DSL events for a single OpenAPI operation.

:class:`OperationVisitor` is the core of the generator. For one operation it
produces, in this fixed order:

1. the verb event (``get``, ``post``, ...) carrying the path;
2. ``id`` and ``description``;
3. ``consumes`` and ``produces``;
4. one ``param`` ... ``endParam`` block per declared parameter;
5. for OpenAPI 3 only, the parameters synthesized from the request body;
6. ``to`` with the destination.

Every keyed event except ``required`` goes through :func:`is_empty` first and
is dropped when its value is empty. Nothing is emitted for an operation the
filter rejects. A failure part-way through leaves the events emitted so far
in the sink; there is no rollback.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from restdsl.emitter.base import CodeEmitter, is_empty
from restdsl.generator.destinations import DestinationGenerator
from restdsl.generator.filters import OperationFilter
from restdsl.generator.parameters import (
    body_parameter,
    extract_parameter,
    form_parameter,
)
from restdsl.models import (
    HttpMethod,
    NormalizedParameter,
    Operation,
    V2Operation,
    V3Operation,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=CodeEmitter)


class OperationVisitor(Generic[E]):
    """Walk one operation at a time and forward its events to *emitter*.

    The visitor holds no state between :meth:`visit` calls; the same
    instance can be reused for every operation of a document.

    Args:
        emitter: The sink receiving the events.
        operation_filter: Decides from the operation id whether to emit.
        destination_generator: Produces the value of the final ``to`` event.
    """

    def __init__(
        self,
        emitter: E,
        operation_filter: OperationFilter,
        destination_generator: DestinationGenerator,
    ) -> None:
        self.emitter = emitter
        self.filter = operation_filter
        self.destination_generator = destination_generator

    def visit(self, method: HttpMethod | str, operation: Operation) -> bool:
        """Emit the events for *operation*.

        Args:
            method: The HTTP method the operation is declared under.
            operation: A :class:`~restdsl.models.V2Operation` or
                :class:`~restdsl.models.V3Operation`.

        Returns:
            ``True`` if the operation was emitted, ``False`` if the filter
            rejected it.

        Raises:
            UnknownParameterLocation: If a parameter declares an unsupported
                ``in`` value.
        """
        if not self.filter.accept(operation.operation_id):
            logger.debug("Filtered out operation '%s'", operation.operation_id)
            return False

        method_name = method.value if isinstance(method, HttpMethod) else str(method)
        self.emitter.emit(method_name.lower(), operation.path)

        self.emit("id", operation.operation_id)
        self.emit("description", operation.description)
        self.emit("consumes", consumed_media_types(operation))
        self.emit("produces", produced_media_types(operation))

        for parameter in operation.parameters:
            self.emit_parameter(extract_parameter(parameter))

        if isinstance(operation, V3Operation):
            self.emit_request_body(operation)

        self.emitter.emit(
            "to", self.destination_generator.generate_destination_for(operation)
        )
        return True

    def emit(self, event: str, value: Any) -> E:  # noqa: ANN401
        """Emit a keyed event unless *value* is empty."""
        if is_empty(value):
            return self.emitter
        if isinstance(value, tuple):
            value = list(value)
        self.emitter.emit(event, value)
        return self.emitter

    def emit_parameter(self, parameter: NormalizedParameter) -> E:
        """Emit one ``param`` ... ``endParam`` block."""
        self.emitter.emit("param")
        self.emit("name", parameter.name)
        self.emit("type", parameter.location)
        self.emit("dataType", parameter.data_type)
        self.emit("allowableValues", parameter.allowable_values)
        self.emit("collectionFormat", parameter.collection_format)
        self.emit("defaultValue", parameter.default_value)
        self.emit("arrayType", parameter.array_type)
        self.emitter.emit("required", parameter.required)
        self.emit("description", parameter.description)
        self.emitter.emit("endParam")
        return self.emitter

    def emit_request_body(self, operation: V3Operation) -> E:
        """Emit the parameters standing in for an OpenAPI 3 request body.

        Form-like content types (any media type containing ``form``) whose
        schema declares ``properties`` produce one ``formData`` parameter per
        property. When no content type yields a form field, a single
        required ``body`` parameter is emitted instead.
        """
        request_body = operation.request_body
        if request_body is None:
            return self.emitter

        found_form = False
        for content_type, media_type in request_body.content.items():
            schema = media_type.schema_
            if "form" not in content_type or schema is None or schema.properties is None:
                continue
            for name, property_schema in schema.properties.items():
                found_form = True
                self.emit_parameter(
                    form_parameter(name, property_schema, request_body.required)
                )

        if not found_form:
            self.emit_parameter(body_parameter(request_body.description))
        return self.emitter


def consumed_media_types(operation: Operation) -> list[str]:
    """Media types the operation accepts.

    Swagger 2 declares them on the operation; OpenAPI 3 derives them from
    the request body's content map.
    """
    if isinstance(operation, V2Operation):
        return list(operation.consumes)
    if operation.request_body is None:
        return []
    return list(operation.request_body.content)


def produced_media_types(operation: Operation) -> list[str]:
    """Media types the operation returns.

    For OpenAPI 3 the content types of every response are concatenated in
    declaration order. Duplicates across responses are kept.
    """
    if isinstance(operation, V2Operation):
        return list(operation.produces)
    produces: list[str] = []
    for response in operation.responses.values():
        produces.extend(response.content)
    return produces
