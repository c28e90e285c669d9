"""
Per-company link cache.

company_key -> ordered list of Link, held in process memory.

There is no expiry and no eviction: an entry is served verbatim until the
process restarts or refresh() / put() overwrites it. Growth is bounded only
by the number of distinct companies searched.
"""

from typing import Dict, List, Optional

from .models import Link


class LinkCache:
    """Process-local company-key -> links store."""

    def __init__(self):
        # Single dict assignment per write; writers for different keys never interact
        self._entries: Dict[str, List[Link]] = {}

    def get(self, key: str) -> Optional[List[Link]]:
        """Return a copy of the cached links for key, or None."""
        entry = self._entries.get(key)
        return list(entry) if entry is not None else None

    def put(self, key: str, links: List[Link]) -> None:
        """Store (or overwrite) the entry for key."""
        self._entries[key] = list(links)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
