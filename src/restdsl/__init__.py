"""restdsl -- Generate REST DSL routes from Swagger 2.0 and OpenAPI 3.x documents.

This package walks the operations of an OpenAPI document and emits, for each
one, the statements of a fluent REST routing DSL: the verb and path, its id
and description, the media types it consumes and produces, one ``param``
block per parameter, and the ``to`` destination it routes to.

Typical workflow::

    restdsl generate petstore.yaml --filter 'get*' -o PetRoutes.java
    restdsl generate petstore.yaml --format yaml

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
