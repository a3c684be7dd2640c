from __future__ import annotations

import json
from typing import Any, MutableMapping

from ..core.constants import RECENT_STAFF_KEY, RECENT_STAFF_LIMIT


class RecentStaffStore:
    """Recently used staff names, most recent first.

    The list lives in a client-side key-value slot (the Flask session in the
    web app) as a JSON-encoded array, independent of the visits store. A
    missing or unreadable slot reads as an empty list.
    """

    def __init__(
        self,
        slot: MutableMapping[str, Any],
        *,
        key: str = RECENT_STAFF_KEY,
        limit: int = RECENT_STAFF_LIMIT,
    ):
        self._slot = slot
        self._key = key
        self._limit = int(limit)

    def names(self) -> list[str]:
        raw = self._slot.get(self._key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return []
        if not isinstance(data, list):
            return []
        return [n for n in data if isinstance(n, str)][: self._limit]

    def remember(self, name: str) -> list[str]:
        """Move ``name`` to the front (case-insensitive de-dup) and persist."""
        name = (name or "").strip()
        if not name:
            return self.names()

        recent = [n for n in self.names() if n.lower() != name.lower()]
        recent.insert(0, name)
        recent = recent[: self._limit]

        self._slot[self._key] = json.dumps(recent)
        return recent

    def clear(self) -> None:
        self._slot.pop(self._key, None)
