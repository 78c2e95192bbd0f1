"""OpenAPI document parser -- load documents and build operation models.

This sub-package turns a raw Swagger 2.0 or OpenAPI 3.x document (JSON or
YAML, local file or remote URL) into the typed operation models that the
generator walks.

Typical usage::

    from restdsl.parser import detect_version, iter_operations, load_spec

    raw = load_spec("petstore.yaml")
    version = detect_version(raw)
    for method, operation in iter_operations(raw, version):
        print(method.value.upper(), operation.path)

Sub-modules:

* :mod:`~restdsl.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and version detection.
* :mod:`~restdsl.parser.operations` -- Builds
  :class:`~restdsl.models.V2Operation` / :class:`~restdsl.models.V3Operation`
  models from raw operation dicts. References are left unresolved.
"""

from restdsl.parser.loader import detect_version, load_spec
from restdsl.parser.operations import build_operation, iter_operations

__all__ = ["load_spec", "detect_version", "build_operation", "iter_operations"]
