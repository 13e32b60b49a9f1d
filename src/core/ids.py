# src/core/ids.py - v1
"""Opaque identifier allocation for entities, relationships and attachments."""

from __future__ import annotations

import uuid
from collections.abc import Callable


class IdentityAllocator:
    """Issues uuid4 string ids that never collide with an id already in use.

    Loaded projects may carry arbitrary caller-chosen ids, so uniqueness is
    checked against the live collections rather than assumed.
    """

    def __init__(self, factory: Callable[[], str] | None = None) -> None:
        self._factory = factory or (lambda: str(uuid.uuid4()))

    def allocate(self, in_use: Callable[[str], bool] | None = None) -> str:
        """Return a fresh id for which ``in_use(id)`` is false."""
        while True:
            candidate = self._factory()
            if in_use is None or not in_use(candidate):
                return candidate
