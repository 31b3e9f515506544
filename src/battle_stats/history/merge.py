from __future__ import annotations

import threading
from collections.abc import Iterable

from battle_stats.history.categories import Category
from battle_stats.history.classify import identity_key, is_excluded
from battle_stats.history.types import MatchRecord


class MatchAccumulator:
    """Records merged from every sub-mode of one query, plus the identity keys seen.

    Owned by a single query call. Identity and exclusion are computed by the caller's
    thread before the lock is taken; only the seen-check and append are serialized.
    """

    def __init__(self, category: str | Category) -> None:
        self.category = category
        self._records: list[MatchRecord] = []
        self._seen: set[str] = set()
        self._lock = threading.Lock()

    def _classify(self, records: Iterable[MatchRecord]) -> list[tuple[str, MatchRecord]]:
        return [
            (identity_key(record), record)
            for record in records
            if not is_excluded(record, self.category)
        ]

    def _insert(self, key: str, record: MatchRecord) -> bool:
        # Caller holds self._lock.
        if key in self._seen:
            return False
        self._seen.add(key)
        self._records.append(record)
        return True

    def admit(self, record: MatchRecord) -> bool:
        candidates = self._classify([record])
        if not candidates:
            return False
        key, rec = candidates[0]
        with self._lock:
            return self._insert(key, rec)

    def admit_many(self, records: Iterable[MatchRecord]) -> int:
        """Admit one sub-mode's records under one lock acquisition; returns how many were new."""

        candidates = self._classify(records)
        admitted = 0
        with self._lock:
            for key, record in candidates:
                if self._insert(key, record):
                    admitted += 1
        return admitted

    @property
    def records(self) -> list[MatchRecord]:
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
