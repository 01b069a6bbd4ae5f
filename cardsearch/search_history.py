"""Thread-safe counter of search terms"""

import threading
from typing import Dict, Optional


class SearchHistory:
    """
    Counts how often each (normalised) search term was requested.
    
    The only mutable state shared between requests; every access goes
    through one lock so concurrent increments are never lost.
    """

    def __init__(self):
        self._counts: Dict[str, int] = {}
        self._lock = threading.Lock()

    def record_search(self, term: Optional[str]) -> None:
        """Count a search; blank terms are ignored, others lowercased and stripped"""
        if term is None or not term.strip():
            return

        normalized = term.strip().lower()
        with self._lock:
            self._counts[normalized] = self._counts.get(normalized, 0) + 1

    def popular_searches(self, limit: int = 10) -> Dict[str, int]:
        """
        Most frequent terms, highest count first (ties alphabetical).
        
        Args:
            limit: Maximum number of terms (<= 0 returns an empty dict)
        """
        if limit <= 0:
            return {}
        ordered = sorted(self.snapshot().items(), key=lambda item: (-item[1], item[0]))
        return dict(ordered[:limit])

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def clear(self) -> None:
        with self._lock:
            self._counts.clear()
