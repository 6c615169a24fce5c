from __future__ import annotations

import threading
import time
from collections import defaultdict
from typing import Any, Protocol


class VisitHistoryStore(Protocol):
    def get_visited_ids(self, user_id: str) -> set[str]:
        ...


class VisitStore:
    """In-memory visit log keyed by user id."""

    def __init__(self) -> None:
        self._visits: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self._lock = threading.Lock()

    def record_visit(self, user_id: str, destination_id: str) -> int:
        """Append a visit and return the user's total visit count."""
        with self._lock:
            visits = self._visits[user_id]
            visits.append({"destination_id": destination_id, "timestamp": time.time()})
            return len(visits)

    def get_visited_ids(self, user_id: str) -> set[str]:
        with self._lock:
            return {v["destination_id"] for v in self._visits.get(user_id, [])}
