"""Build typed operation models from raw OpenAPI dicts.

This module walks the ``paths`` object of a loaded document and turns each
path + HTTP method pair into a :class:`~restdsl.models.V2Operation` or
:class:`~restdsl.models.V3Operation`, depending on the document version.
It reads only the fields the generator emits and performs no validation:
missing or malformed optional fields simply stay unset.

``$ref`` pointers are **not** resolved. A referenced schema becomes a
:class:`~restdsl.models.Schema` carrying only ``ref``; a referenced request
body or response has no content; a referenced parameter has no ``name`` or
``in`` to emit and is skipped with a warning.

Parameter merging follows the OpenAPI specification: path-level parameters
provide defaults, and operation-level parameters override them when they share
the same ``name`` and ``in`` values.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, Optional

from restdsl.models import (
    HttpMethod,
    Items,
    MediaType,
    Operation,
    RequestBody,
    Response,
    Schema,
    V2Operation,
    V2Parameter,
    V3Operation,
    V3Parameter,
)

logger = logging.getLogger(__name__)


def iter_operations(
    spec: dict[str, Any], version: int
) -> Iterator[tuple[HttpMethod, Operation]]:
    """Yield ``(method, operation)`` for every operation in the document.

    Paths are visited in document order and, within a path, methods in
    :class:`~restdsl.models.HttpMethod` order.

    Args:
        spec: The loaded document.
        version: ``2`` or ``3``, as returned by
            :func:`~restdsl.parser.loader.detect_version`.
    """
    paths = spec.get("paths")
    if not isinstance(paths, dict):
        return
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        yield from iter_path_operations(str(path), path_item, version)


def iter_path_operations(
    path: str, path_item: dict[str, Any], version: int
) -> Iterator[tuple[HttpMethod, Operation]]:
    """Yield ``(method, operation)`` for the operations of one path item."""
    path_params = _as_list(path_item.get("parameters"))
    for method in HttpMethod:
        raw = path_item.get(method.value)
        if not isinstance(raw, dict):
            continue
        yield method, build_operation(path, raw, version, path_params)


def build_operation(
    path: str,
    operation: dict[str, Any],
    version: int,
    path_params: Optional[list[dict[str, Any]]] = None,
) -> Operation:
    """Build the typed model of one raw *Operation Object*.

    Args:
        path: The path the operation is declared under (e.g. ``/pets/{id}``).
        operation: The raw operation dict.
        version: ``2`` for Swagger 2.0, ``3`` for OpenAPI 3.x.
        path_params: Path-level parameters, merged under the operation's own.

    Returns:
        A :class:`~restdsl.models.V2Operation` or
        :class:`~restdsl.models.V3Operation`.

    Raises:
        ValueError: If *version* is neither 2 nor 3.
    """
    params = merge_parameters(path_params or [], _as_list(operation.get("parameters")))

    if version == 2:
        return V2Operation(
            path=path,
            operation_id=_opt_str(operation.get("operationId")),
            description=_opt_str(operation.get("description")),
            parameters=[_v2_parameter(p) for p in params if _is_inline(p, path)],
            consumes=_string_list(operation.get("consumes")),
            produces=_string_list(operation.get("produces")),
        )
    if version == 3:
        return V3Operation(
            path=path,
            operation_id=_opt_str(operation.get("operationId")),
            description=_opt_str(operation.get("description")),
            parameters=[_v3_parameter(p) for p in params if _is_inline(p, path)],
            request_body=_request_body(operation.get("requestBody")),
            responses=_responses(operation.get("responses")),
        )
    raise ValueError(f"Unsupported OpenAPI major version: {version}")


def merge_parameters(
    path_params: list[Any],
    op_params: list[Any],
) -> list[Any]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters replace path-level ones with the same
    ``name`` and ``in``. Path-level parameters come first.
    """
    overridden = {_param_key(p) for p in op_params if isinstance(p, dict)}
    merged = [
        p for p in path_params
        if isinstance(p, dict) and _param_key(p) not in overridden
    ]
    merged.extend(p for p in op_params if isinstance(p, dict))
    return merged


def build_schema(raw: Any) -> Optional[Schema]:  # noqa: ANN401
    """Build a :class:`~restdsl.models.Schema` from a raw schema dict.

    Returns ``None`` when *raw* is not a dict. A ``$ref`` dict becomes a
    reference-only schema.
    """
    if not isinstance(raw, dict):
        return None
    if "$ref" in raw:
        return Schema(ref=str(raw["$ref"]))

    properties = raw.get("properties")
    return Schema(
        type=_schema_type(raw.get("type")),
        description=_opt_str(raw.get("description")),
        enum_values=_as_list(raw.get("enum")),
        default=raw.get("default"),
        items=build_schema(raw.get("items")),
        properties=(
            {str(name): build_schema(prop) or Schema() for name, prop in properties.items()}
            if isinstance(properties, dict)
            else None
        ),
    )


def _param_key(param: dict[str, Any]) -> tuple[str, str]:
    return (_opt_str(param.get("name")) or "", _opt_str(param.get("in")) or "")


def _is_inline(param: dict[str, Any], path: str) -> bool:
    if "$ref" in param:
        logger.warning("Skipping unresolved parameter %s on '%s'", param["$ref"], path)
        return False
    return True


def _schema_type(type_value: Any) -> Optional[str]:  # noqa: ANN401
    """Return the type of a schema, picking the first non-null entry of an
    OpenAPI 3.1 type array (``["string", "null"]``)."""
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        return str(non_null[0]) if non_null else None
    if type_value is None:
        return None
    return str(type_value)


def _opt_str(value: Any) -> Optional[str]:  # noqa: ANN401
    """Return a scalar as a string; ``None`` and collections become ``None``.

    YAML turns unquoted ``yes`` or ``404`` into a boolean or an int, so
    scalars are rendered back to text instead of being rejected.
    """
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _opt_bool(value: Any) -> Optional[bool]:  # noqa: ANN401
    return value if isinstance(value, bool) else None


def _as_list(value: Any) -> list[Any]:  # noqa: ANN401
    return value if isinstance(value, list) else []


def _string_list(values: Any) -> list[str]:  # noqa: ANN401
    if not isinstance(values, list):
        return []
    return [str(v) for v in values]


def _v2_parameter(param: dict[str, Any]) -> V2Parameter:
    items = param.get("items")
    return V2Parameter(
        name=_opt_str(param.get("name")) or "",
        location=_opt_str(param.get("in")) or "",
        required=_opt_bool(param.get("required")),
        description=_opt_str(param.get("description")),
        type=_opt_str(param.get("type")),
        enum_values=_as_list(param.get("enum")),
        collection_format=_opt_str(param.get("collectionFormat")),
        default=param.get("default"),
        items=Items(type=_opt_str(items.get("type"))) if isinstance(items, dict) else None,
    )


def _v3_parameter(param: dict[str, Any]) -> V3Parameter:
    return V3Parameter(
        name=_opt_str(param.get("name")) or "",
        location=_opt_str(param.get("in")) or "",
        required=_opt_bool(param.get("required")),
        description=_opt_str(param.get("description")),
        schema=build_schema(param.get("schema")),
        style=_opt_str(param.get("style")),
        explode=_opt_bool(param.get("explode")),
    )


def _content(raw: Any) -> dict[str, MediaType]:  # noqa: ANN401
    if not isinstance(raw, dict):
        return {}
    return {
        str(media_type): MediaType(
            schema=build_schema(entry.get("schema")) if isinstance(entry, dict) else None
        )
        for media_type, entry in raw.items()
    }


def _request_body(body: Any) -> Optional[RequestBody]:  # noqa: ANN401
    if not isinstance(body, dict):
        return None
    if "$ref" in body:
        logger.warning("Request body %s is not resolved; emitting it as 'body'", body["$ref"])
        return RequestBody()
    return RequestBody(
        required=_opt_bool(body.get("required")),
        description=_opt_str(body.get("description")),
        content=_content(body.get("content")),
    )


def _responses(responses: Any) -> dict[str, Response]:  # noqa: ANN401
    if not isinstance(responses, dict):
        return {}
    result: dict[str, Response] = {}
    for status_code, response in responses.items():
        if not isinstance(response, dict):
            continue
        result[str(status_code)] = Response(
            description=_opt_str(response.get("description")),
            content=_content(response.get("content")),
        )
    return result
