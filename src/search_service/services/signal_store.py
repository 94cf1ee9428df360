"""Process-wide personalization signals.

Holds per-user search history, global query popularity and per-(user,
product) interaction counters. All three maps are guarded by a single lock,
so callers never synchronize manually and concurrent read-modify-write
operations never lose updates.
"""

import threading
from collections import OrderedDict, deque
from dataclasses import dataclass, replace

import structlog

from search_service.schemas import InteractionType, TrendingSearch
from search_service.services.query_enhancer import normalize_query
from shared.constants import (
    MAX_INTERACTION_RECORDS,
    MAX_TRACKED_USERS,
    SEARCH_HISTORY_LIMIT,
    TRENDING_SEARCHES_LIMIT,
)

logger = structlog.get_logger()


@dataclass
class InteractionRecord:
    views: int = 0
    clicks: int = 0
    add_to_cart: int = 0


class SignalStore:
    """Thread-safe in-memory store for behavior signals.

    Search histories are FIFO-bounded per user. Users and interaction
    records are additionally capped with least-recently-written eviction so
    a long-running process does not grow without bound.
    """

    def __init__(
        self,
        history_limit: int = SEARCH_HISTORY_LIMIT,
        max_tracked_users: int = MAX_TRACKED_USERS,
        max_interaction_records: int = MAX_INTERACTION_RECORDS,
    ):
        self.history_limit = history_limit
        self.max_tracked_users = max_tracked_users
        self.max_interaction_records = max_interaction_records

        self._lock = threading.Lock()
        self._history: OrderedDict[str, deque[str]] = OrderedDict()
        self._popularity: dict[str, int] = {}
        self._interactions: OrderedDict[tuple[str, str], InteractionRecord] = OrderedDict()

    # ==========================================================================
    # Writes
    # ==========================================================================

    def track_search(self, query: str, user_id: str | None = None) -> None:
        """Count a search for trending and append it to the user's history."""
        normalized = normalize_query(query)
        if not normalized:
            return

        with self._lock:
            self._popularity[normalized] = self._popularity.get(normalized, 0) + 1

            if user_id:
                history = self._history.get(user_id)
                if history is None:
                    history = deque(maxlen=self.history_limit)
                    self._history[user_id] = history
                else:
                    self._history.move_to_end(user_id)
                history.append(query)

                while len(self._history) > self.max_tracked_users:
                    evicted, _ = self._history.popitem(last=False)
                    logger.debug("Evicted search history", user_id=evicted)

    def track_interaction(
        self,
        user_id: str | None,
        product_id: str,
        interaction_type: InteractionType | str = InteractionType.VIEW,
    ) -> None:
        """Increment the matching counter; anonymous interactions are ignored."""
        if not user_id:
            return
        interaction_type = InteractionType(interaction_type)
        key = (user_id, str(product_id))

        with self._lock:
            record = self._interactions.get(key)
            if record is None:
                record = InteractionRecord()
                self._interactions[key] = record
            else:
                self._interactions.move_to_end(key)

            if interaction_type is InteractionType.VIEW:
                record.views += 1
            elif interaction_type is InteractionType.CLICK:
                record.clicks += 1
            elif interaction_type is InteractionType.CART:
                record.add_to_cart += 1

            while len(self._interactions) > self.max_interaction_records:
                self._interactions.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._history.clear()
            self._popularity.clear()
            self._interactions.clear()

    # ==========================================================================
    # Reads (snapshots; never alter eviction order)
    # ==========================================================================

    def search_history(self, user_id: str | None) -> list[str]:
        if not user_id:
            return []
        with self._lock:
            history = self._history.get(user_id)
            return list(history) if history else []

    def recent_searches(self, user_id: str | None, count: int) -> list[str]:
        history = self.search_history(user_id)
        return history[-count:] if count > 0 else []

    def get_interaction(self, user_id: str | None, product_id: str) -> InteractionRecord | None:
        if not user_id:
            return None
        with self._lock:
            record = self._interactions.get((user_id, str(product_id)))
            return replace(record) if record else None

    def trending_searches(self, limit: int = TRENDING_SEARCHES_LIMIT) -> list[TrendingSearch]:
        """Top queries by count; ties keep first-tracked order."""
        if limit <= 0:
            return []
        with self._lock:
            counts = list(self._popularity.items())
        counts.sort(key=lambda item: item[1], reverse=True)
        return [TrendingSearch(query=q, count=c) for q, c in counts[:limit]]

    @property
    def interaction_count(self) -> int:
        with self._lock:
            return len(self._interactions)

    @property
    def tracked_user_count(self) -> int:
        with self._lock:
            return len(self._history)
