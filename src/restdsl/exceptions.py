"""Exception hierarchy for restdsl.

All exceptions inherit from :class:`RestDslError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`restdsl.exit_codes`.
The top-level error handler in :func:`restdsl.app.main` catches
``RestDslError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    RestDslError (exit 1)
    +-- InvalidUsageError        (exit 2)
    +-- SpecParseError           (exit 7)
    +-- UnknownParameterLocation (exit 8)
    +-- DestinationError         (exit 9)
    +-- ConfigError              (exit 1)
"""

from restdsl.exit_codes import (
    EXIT_DESTINATION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_UNKNOWN_LOCATION,
)


class RestDslError(Exception):
    """Base exception for all restdsl errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`restdsl.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RestDslError):
    """Raised for invalid CLI arguments or option values."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(RestDslError):
    """Raised when the OpenAPI document cannot be loaded or its version is not recognised."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class UnknownParameterLocation(RestDslError):
    """Raised when a parameter's ``in`` value is not a REST DSL parameter type.

    Attributes:
        location: The offending raw location string.
        parameter: Name of the parameter that declared it.
    """

    exit_code = EXIT_UNKNOWN_LOCATION

    def __init__(self, location: str, parameter: str | None = None):
        self.location = location
        self.parameter = parameter
        where = f" on parameter '{parameter}'" if parameter else ""
        super().__init__(f"Unknown parameter location '{location}'{where}")


class DestinationError(RestDslError):
    """Raised when a destination cannot be generated for an operation."""

    exit_code = EXIT_DESTINATION_ERROR


class ConfigError(RestDslError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
