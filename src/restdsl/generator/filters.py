"""Decide which operations are emitted, by operation id."""

from __future__ import annotations

import fnmatch
import re
from typing import Optional


class OperationFilter:
    """Accept operations whose id matches one of a set of patterns.

    *patterns* is a comma-separated list. Each pattern matches an operation
    id when it is equal to it, when it matches as a shell-style wildcard
    (``find*``, ``*Pet``), or when it matches as a full regular expression
    (``(add|update)Pet``). With no patterns every operation is accepted,
    including operations without an id; with patterns, an operation without
    an id is rejected.

    Example::

        OperationFilter("listPets,get*").accept("getPetById")  # True
        OperationFilter().accept(None)                          # True
    """

    def __init__(self, patterns: Optional[str] = None) -> None:
        self.patterns: list[str] = [
            p.strip() for p in (patterns or "").split(",") if p.strip()
        ]

    def accept(self, operation_id: Optional[str]) -> bool:
        if not self.patterns:
            return True
        if operation_id is None:
            return False
        return any(_matches(operation_id, pattern) for pattern in self.patterns)

    def __repr__(self) -> str:
        return f"OperationFilter({','.join(self.patterns)!r})"


def _matches(name: str, pattern: str) -> bool:
    if name == pattern:
        return True
    if fnmatch.fnmatchcase(name, pattern):
        return True
    try:
        return re.fullmatch(pattern, name) is not None
    except re.error:
        return False
