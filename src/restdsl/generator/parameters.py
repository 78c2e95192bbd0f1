"""Normalize Swagger 2 and OpenAPI 3 parameters into one descriptor.

The two OpenAPI generations describe a parameter very differently: Swagger 2
puts ``type``, ``enum``, ``default``, ``items`` and ``collectionFormat``
directly on the parameter, while OpenAPI 3 moves type information into a
nested ``schema`` and replaces ``collectionFormat`` with ``style`` +
``explode``. :func:`extract_parameter` hides that difference and returns a
:class:`~restdsl.models.NormalizedParameter` for the visitor to emit.

**Mapping rules:**

* ``location`` comes from ``in``. Unknown non-empty values raise
  :class:`~restdsl.exceptions.UnknownParameterLocation`; an empty value
  leaves ``location`` unset.
* Body parameters never carry type information, whatever the source says.
* OpenAPI 3 ``style: form`` maps to ``multi`` when ``explode`` is true and to
  ``csv`` otherwise. Other styles have no collection format.
* ``required`` defaults to ``False``.

Request bodies have no parameter object of their own; :func:`form_parameter`
and :func:`body_parameter` synthesize the descriptors the visitor emits for
them.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from restdsl.emitter.base import is_empty
from restdsl.exceptions import UnknownParameterLocation
from restdsl.models import (
    CollectionFormat,
    NormalizedParameter,
    ParameterLocation,
    RawParameter,
    Schema,
    V2Parameter,
    V3Parameter,
)

logger = logging.getLogger(__name__)


def extract_parameter(parameter: RawParameter) -> NormalizedParameter:
    """Convert one raw parameter into a :class:`~restdsl.models.NormalizedParameter`.

    Args:
        parameter: A :class:`~restdsl.models.V2Parameter` or
            :class:`~restdsl.models.V3Parameter`.

    Returns:
        The normalized descriptor.

    Raises:
        UnknownParameterLocation: If ``in`` is set to a value that is not a
            REST DSL parameter type (``cookie`` included).
        TypeError: If *parameter* is neither variant.

    Example::

        param = V2Parameter(name="limit", location="query", type="integer")
        extract_parameter(param).data_type  # "integer"
    """
    location = parse_location(parameter.location, parameter.name)
    fields: dict[str, Any] = {}

    if location is not ParameterLocation.BODY:
        if isinstance(parameter, V2Parameter):
            fields = _v2_fields(parameter)
        elif isinstance(parameter, V3Parameter):
            fields = _v3_fields(parameter)
        else:
            raise TypeError(f"Unsupported parameter type: {type(parameter).__name__}")

    return NormalizedParameter(
        name=parameter.name,
        location=location,
        required=bool(parameter.required) if parameter.required is not None else False,
        description=parameter.description,
        **fields,
    )


def parse_location(raw: Optional[str], name: Optional[str] = None) -> Optional[ParameterLocation]:
    """Map a raw ``in`` value onto :class:`~restdsl.models.ParameterLocation`.

    Returns ``None`` for an empty value. Matching is exact (``formData``,
    not ``formdata``).
    """
    if not raw:
        return None
    try:
        return ParameterLocation(raw)
    except ValueError:
        raise UnknownParameterLocation(raw, name) from None


def form_parameter(name: str, schema: Optional[Schema], required: Optional[bool]) -> NormalizedParameter:
    """Descriptor for one property of a form-encoded request body.

    ``required`` is the request body's flag, shared by every field.
    """
    return NormalizedParameter(
        name=name,
        location=ParameterLocation.FORM_DATA,
        data_type=schema.type if schema is not None else None,
        required=bool(required) if required is not None else False,
        description=schema.description if schema is not None else None,
    )


def body_parameter(description: Optional[str]) -> NormalizedParameter:
    """Descriptor for a request body that is not expanded into form fields.

    Always required: a body parameter is only synthesized when the
    operation declares a request body at all.
    """
    return NormalizedParameter(
        name="body",
        location=ParameterLocation.BODY,
        required=True,
        description=description,
    )


def stringify(value: Any) -> str:  # noqa: ANN401
    """Render a schema value the way the DSL expects it.

    Booleans become ``true``/``false`` and ``None`` becomes ``null``;
    everything else goes through :func:`str`.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _stringify_all(values: Optional[list[Any]]) -> list[str]:
    if not values:
        return []
    return [stringify(v) for v in values]


def _default_value(value: Any) -> Optional[str]:  # noqa: ANN401
    if is_empty(value):
        return None
    return stringify(value)


def _v2_fields(parameter: V2Parameter) -> dict[str, Any]:
    data_type = parameter.type
    fields: dict[str, Any] = {
        "data_type": data_type,
        "allowable_values": _stringify_all(parameter.enum_values),
        "default_value": _default_value(parameter.default),
    }

    if parameter.collection_format:
        try:
            fields["collection_format"] = CollectionFormat(parameter.collection_format)
        except ValueError:
            logger.warning(
                "Ignoring unknown collectionFormat '%s' on parameter '%s'",
                parameter.collection_format,
                parameter.name,
            )

    if data_type == "array" and parameter.items is not None:
        fields["array_type"] = parameter.items.type

    return fields


def _v3_fields(parameter: V3Parameter) -> dict[str, Any]:
    schema = parameter.schema_
    if schema is None:
        return {}

    data_type = schema.type or None
    fields: dict[str, Any] = {
        "data_type": data_type,
        "allowable_values": _stringify_all(schema.enum_values),
        "collection_format": _collection_format_for_style(parameter.style, parameter.explode),
        "default_value": _default_value(schema.default),
    }

    items = schema.items
    if data_type == "array" and items is not None and not items.is_reference:
        fields["array_type"] = items.type

    return fields


def _collection_format_for_style(style: Optional[str], explode: Optional[bool]) -> Optional[CollectionFormat]:
    if style != "form":
        return None
    return CollectionFormat.MULTI if explode else CollectionFormat.CSV
