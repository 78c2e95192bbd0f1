"""Load OpenAPI documents from a URL, local file, or stdin.

This module handles all I/O for fetching raw OpenAPI documents and converting
them into Python dictionaries.  It supports both JSON and YAML formats with
automatic format detection, and recognises both generations the generator
understands: Swagger 2.0 (``swagger: "2.0"``) and OpenAPI 3.x
(``openapi: "3.0.3"``, ``"3.1.0"``, ...).

The two public functions are:

* :func:`load_spec` -- Load and parse a document from any supported source.
* :func:`detect_version` -- Return the major version (``2`` or ``3``),
  rejecting documents that declare neither.

After loading, the raw dict is handed to
:class:`~restdsl.generator.paths.RestDslGenerator`, which builds the
operation models through :mod:`restdsl.parser.operations`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from restdsl.exceptions import SpecParseError


_JSON_SUFFIXES = frozenset({".json"})
_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_spec(source: str) -> dict[str, Any]:
    """Load an OpenAPI document from a URL, a file path, or stdin (``-``).

    The format is detected from the file extension or the response
    ``Content-Type`` when available, and from the content otherwise.

    Args:
        source: An ``http(s)://`` URL, a file path, or ``-`` for stdin.

    Returns:
        The parsed document.

    Raises:
        SpecParseError: If the source cannot be read or parsed.
    """
    if source == "-":
        content, hint, origin = _read_stdin(), "", "stdin"
    elif source.startswith(("http://", "https://")):
        content, hint = _fetch(source)
        origin = source
    else:
        content, hint = _read_file(source)
        origin = source

    if not content.strip():
        raise SpecParseError(f"No content received from {origin}")

    return parse_document(content, hint=hint)


def _read_stdin() -> str:
    try:
        return sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc


def _fetch(url: str) -> tuple[str, str]:
    """GET *url* and return its body with a format hint from ``Content-Type``."""
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        return response.text, "json"
    if "yaml" in content_type or "yml" in content_type:
        return response.text, "yaml"
    return response.text, ""


def _read_file(path: str) -> tuple[str, str]:
    """Read a local file and return its text with a hint from the extension."""
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Document not found: {path}")
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read {path}: {exc}") from exc

    suffix = file_path.suffix.lower()
    if suffix in _JSON_SUFFIXES:
        return content, "json"
    if suffix in _YAML_SUFFIXES:
        return content, "yaml"
    return content, ""


def parse_document(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML.

    JSON is tried first unless *hint* is ``"yaml"``; with a ``"json"`` hint
    a JSON error is final. Otherwise YAML is the fallback, since every JSON
    document is also YAML.

    Raises:
        SpecParseError: If neither parser accepts the content, or the
            top-level value is not a mapping.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise SpecParseError(
        "Failed to parse document as JSON or YAML\n  " + "\n  ".join(errors)
    )


def _require_mapping(result: Any) -> dict[str, Any]:  # noqa: ANN401
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecParseError(f"Document must be a JSON/YAML object (got {kind})")
    return result


def detect_version(spec: dict[str, Any]) -> int:
    """Return the major OpenAPI version of a loaded document.

    Swagger 2.0 documents declare ``swagger: "2.0"``; OpenAPI 3 documents
    declare ``openapi: "3.x.y"``. Numbers are accepted as well as strings
    (YAML reads an unquoted ``2.0`` as a float).

    Args:
        spec: The parsed document dictionary.

    Returns:
        ``2`` for Swagger 2.x, ``3`` for OpenAPI 3.x.

    Raises:
        SpecParseError: If neither field is present or the version is not
            a 2.x Swagger or 3.x OpenAPI version.
    """
    if "swagger" in spec:
        swagger_ver = str(spec["swagger"])
        if swagger_ver.startswith("2."):
            return 2
        raise SpecParseError(
            f"Unsupported Swagger version: {swagger_ver}. Only Swagger 2.0 is supported."
        )

    openapi_version = spec.get("openapi")
    if openapi_version is None:
        raise SpecParseError(
            "Missing 'openapi' or 'swagger' field. Is this an OpenAPI document?"
        )

    version_str = str(openapi_version)
    if version_str.startswith("3."):
        return 3

    raise SpecParseError(
        f"Unsupported OpenAPI version: {version_str}. "
        "Only Swagger 2.0 and OpenAPI 3.x are supported."
    )
