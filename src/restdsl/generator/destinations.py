"""Produce the value of the ``to`` event that closes every REST verb.

The generator only knows *that* an operation routes somewhere; *where* is
delegated to a :class:`DestinationGenerator`. The default,
:class:`DirectToOperationId`, routes each operation to a ``direct:``
endpoint named after its operation id.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any

from restdsl.exceptions import DestinationError
from restdsl.models import Operation

logger = logging.getLogger(__name__)

_SLUG_INVALID_RE = re.compile(r"[^A-Za-z0-9]+")


class DestinationGenerator(ABC):
    """Base class for destination strategies.

    :meth:`generate_destination_for` is called exactly once per emitted
    operation, after all of its parameters. Its return value is forwarded to
    the sink unchanged.
    """

    @abstractmethod
    def generate_destination_for(self, operation: Operation) -> Any:  # noqa: ANN401
        ...


class DirectToOperationId(DestinationGenerator):
    """Route to an endpoint URI built from a template.

    ``{operation_id}`` in *template* is replaced by the operation id. An
    operation without an id gets a slug of its path instead, e.g.
    ``pets-petId-photos``. A path with no usable characters (``/``) raises
    :class:`~restdsl.exceptions.DestinationError`.

    Args:
        template: Endpoint URI template. Must contain ``{operation_id}``.

    Raises:
        DestinationError: If *template* lacks the ``{operation_id}``
            placeholder.
    """

    PLACEHOLDER = "{operation_id}"

    def __init__(self, template: str = "direct:{operation_id}") -> None:
        if self.PLACEHOLDER not in template:
            raise DestinationError(
                f"Destination template '{template}' must contain {self.PLACEHOLDER}"
            )
        self.template = template

    def generate_destination_for(self, operation: Operation) -> str:
        name = operation.operation_id
        if not name:
            name = path_slug(operation.path)
            logger.debug("Operation on '%s' has no id, using '%s'", operation.path, name)
        return self.template.replace(self.PLACEHOLDER, name)


def path_slug(path: str) -> str:
    """Turn an API path into a dash-separated endpoint name.

    Example::

        >>> path_slug("/pets/{petId}/photos")
        'pets-petId-photos'
    """
    slug = _SLUG_INVALID_RE.sub("-", path).strip("-")
    if not slug:
        raise DestinationError(f"Cannot derive a destination name from path '{path}'")
    return slug
