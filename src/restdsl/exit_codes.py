"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~restdsl.exceptions.RestDslError` subclass.
Build scripts wrapping ``restdsl generate`` can inspect the exit code to
tell a broken document apart from a bad invocation without parsing stderr.

Example::

    $ restdsl generate swagger.json
    $ echo $?
    8   # EXIT_UNKNOWN_LOCATION -- a parameter declared an unsupported "in"
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or options."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be loaded, parsed, or recognised."""

EXIT_UNKNOWN_LOCATION = 8
"""A parameter declared a location outside body, formData, header, path, query."""

EXIT_DESTINATION_ERROR = 9
"""The destination generator could not produce a destination for an operation."""
