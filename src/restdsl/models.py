"""Canonical Pydantic models shared across all restdsl modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- loaded from JSON config files and CLI flags:
    :class:`RestConfiguration` and :class:`GeneratorConfig`.

**Operation models** -- the version-agnostic read-only view of one OpenAPI
operation, built by :mod:`restdsl.parser.operations` and consumed by the
:class:`~restdsl.generator.visitor.OperationVisitor`:
    :class:`HttpMethod`, :class:`ParameterLocation`,
    :class:`CollectionFormat`, :class:`Items`, :class:`Schema`,
    :class:`V2Parameter`, :class:`V3Parameter`, :class:`MediaType`,
    :class:`RequestBody`, :class:`Response`, :class:`V2Operation`,
    :class:`V3Operation`, and :class:`NormalizedParameter`.

**Route models** -- the REST DSL definitions assembled by
:class:`~restdsl.emitter.model.RouteModelEmitter`:
    :class:`ParamDefinition`, :class:`VerbDefinition`, and
    :class:`RestDefinition`.

Operation models are frozen: the visitor only ever reads them, and a fresh
set is built for every document walk.
"""

from __future__ import annotations

import enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class RestConfiguration(BaseModel):
    """Settings emitted as a ``restConfiguration`` block ahead of ``rest``.

    Every field is optional; empty fields are skipped on emission, and a
    configuration whose fields are all empty emits nothing at all.
    """

    component: Optional[str] = Field(
        default=None, description="REST component, e.g. servlet, undertow, platform-http"
    )
    context_path: Optional[str] = Field(
        default=None, description="Context path the REST services are mounted under"
    )
    api_context_path: Optional[str] = Field(
        default=None, description="Path the API documentation is served from"
    )
    host: Optional[str] = Field(default=None, description="Host name to bind")

    def is_blank(self) -> bool:
        """Return ``True`` when no field carries a value."""
        return not any(
            (self.component, self.context_path, self.api_context_path, self.host)
        )


class GeneratorConfig(BaseModel):
    """Effective generator settings after precedence resolution.

    Loaded by :func:`~restdsl.config.resolve_config` from the user config
    file, the project-local ``restdsl.json``, ``RESTDSL_*`` environment
    variables, and CLI flags, in increasing order of precedence.
    """

    filter: Optional[str] = Field(
        default=None,
        description="Comma-separated operation id patterns; empty accepts all",
    )
    destination: str = Field(
        default="direct:{operation_id}",
        description="Destination template; {operation_id} is substituted",
    )
    format: str = Field(
        default="dsl", description="Output format: dsl, yaml, json, events"
    )
    continue_on_error: bool = Field(
        default=False, description="Skip operations that fail instead of aborting"
    )
    rest: RestConfiguration = Field(default_factory=RestConfiguration)


# --- Operation Models ---


class HttpMethod(str, enum.Enum):
    """HTTP methods a path item can declare, in visiting order."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class ParameterLocation(str, enum.Enum):
    """REST DSL parameter types, matched against the OpenAPI ``in`` field.

    ``cookie`` has no REST DSL counterpart and is therefore not a member;
    extracting a cookie parameter raises
    :class:`~restdsl.exceptions.UnknownParameterLocation`.
    """

    BODY = "body"
    FORM_DATA = "formData"
    HEADER = "header"
    PATH = "path"
    QUERY = "query"


class CollectionFormat(str, enum.Enum):
    """Encodings for array-valued parameters (Swagger 2 ``collectionFormat``)."""

    CSV = "csv"
    SSV = "ssv"
    TSV = "tsv"
    PIPES = "pipes"
    MULTI = "multi"


class Items(BaseModel):
    """Swagger 2 *Items Object* of an array parameter."""

    model_config = ConfigDict(frozen=True)

    type: Optional[str] = None


class Schema(BaseModel):
    """The subset of a JSON Schema the generator reads.

    A schema that is a ``$ref`` pointer keeps only :attr:`ref`; references
    are never resolved.
    """

    model_config = ConfigDict(frozen=True)

    type: Optional[str] = None
    description: Optional[str] = None
    enum_values: list[Any] = Field(default_factory=list)
    default: Any = None
    items: Optional[Schema] = None
    properties: Optional[dict[str, Schema]] = None
    ref: Optional[str] = None

    @property
    def is_reference(self) -> bool:
        return self.ref is not None


class V2Parameter(BaseModel):
    """A Swagger 2 *Parameter Object*; type information lives on the parameter."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    location: str = ""
    required: Optional[bool] = None
    description: Optional[str] = None
    type: Optional[str] = None
    enum_values: list[Any] = Field(default_factory=list)
    collection_format: Optional[str] = None
    default: Any = None
    items: Optional[Items] = None


class V3Parameter(BaseModel):
    """An OpenAPI 3 *Parameter Object*; type information lives on ``schema``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    location: str = ""
    required: Optional[bool] = None
    description: Optional[str] = None
    schema_: Optional[Schema] = Field(default=None, alias="schema")
    style: Optional[str] = None
    explode: Optional[bool] = None


RawParameter = Union[V2Parameter, V3Parameter]


class MediaType(BaseModel):
    """One entry of an OpenAPI 3 ``content`` map."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    schema_: Optional[Schema] = Field(default=None, alias="schema")


class RequestBody(BaseModel):
    """OpenAPI 3 *Request Body Object*. ``content`` keeps declaration order."""

    model_config = ConfigDict(frozen=True)

    required: Optional[bool] = None
    description: Optional[str] = None
    content: dict[str, MediaType] = Field(default_factory=dict)


class Response(BaseModel):
    """OpenAPI 3 *Response Object*, reduced to its content map."""

    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    content: dict[str, MediaType] = Field(default_factory=dict)


class V2Operation(BaseModel):
    """A Swagger 2 operation with operation-level ``consumes``/``produces``."""

    model_config = ConfigDict(frozen=True)

    version: Literal[2] = 2
    path: str
    operation_id: Optional[str] = None
    description: Optional[str] = None
    parameters: list[V2Parameter] = Field(default_factory=list)
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)


class V3Operation(BaseModel):
    """An OpenAPI 3 operation; media types derive from body and responses."""

    model_config = ConfigDict(frozen=True)

    version: Literal[3] = 3
    path: str
    operation_id: Optional[str] = None
    description: Optional[str] = None
    parameters: list[V3Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = None
    responses: dict[str, Response] = Field(default_factory=dict)


Operation = Union[V2Operation, V3Operation]


class NormalizedParameter(BaseModel):
    """Version-agnostic parameter descriptor produced by the extractor.

    ``location`` is ``None`` only when the source ``in`` was empty.
    ``required`` is never ``None`` and ``allowable_values`` is never
    ``None``; an empty list means no enumeration.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    location: Optional[ParameterLocation] = None
    data_type: Optional[str] = None
    allowable_values: list[str] = Field(default_factory=list)
    collection_format: Optional[CollectionFormat] = None
    default_value: Optional[str] = None
    array_type: Optional[str] = None
    required: bool = False
    description: Optional[str] = None


# --- Route Models ---


class ParamDefinition(BaseModel):
    """A ``param()`` ... ``endParam()`` block of a REST verb."""

    name: Optional[str] = None
    type: Optional[ParameterLocation] = None
    data_type: Optional[str] = Field(default=None, serialization_alias="dataType")
    allowable_values: list[str] = Field(
        default_factory=list, serialization_alias="allowableValues"
    )
    collection_format: Optional[CollectionFormat] = Field(
        default=None, serialization_alias="collectionFormat"
    )
    default_value: Optional[str] = Field(
        default=None, serialization_alias="defaultValue"
    )
    array_type: Optional[str] = Field(default=None, serialization_alias="arrayType")
    required: Optional[bool] = None
    description: Optional[str] = None


class VerbDefinition(BaseModel):
    """One REST verb (``get("/pets")`` and everything up to its ``to``)."""

    method: HttpMethod
    path: str
    id: Optional[str] = None
    description: Optional[str] = None
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    params: list[ParamDefinition] = Field(default_factory=list)
    to: Optional[str] = None


class RestDefinition(BaseModel):
    """A whole ``rest()`` block and its optional configuration."""

    path: Optional[str] = None
    configuration: Optional[RestConfiguration] = None
    verbs: list[VerbDefinition] = Field(default_factory=list)
