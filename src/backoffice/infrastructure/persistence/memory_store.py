"""Versioned in-memory aggregate store.

Every record carries a ``version``. A commit is a batch of writes, each
stating the version it expects to replace; the batch is checked and
applied under one lock, so either every write lands or none does
(compare-and-swap across several aggregates). Readers get deep copies
taken under the same lock and therefore never see half a commit.
"""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, replace
from typing import Any

from backoffice.domain.exceptions import ConcurrencyConflict

KINDS = (
    "products",
    "customers",
    "suppliers",
    "invoices",
    "payments",
    "purchase_orders",
)


@dataclass(frozen=True)
class Write:
    """One pending change.

    ``expected_version`` is None for an insert; ``record`` is None for a
    delete.
    """

    kind: str
    key: str
    expected_version: int | None
    record: Any | None


class InMemoryStore:

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, dict[str, Any]] = {kind: {} for kind in KINDS}
        self._sequences: dict[str, int] = {}

    # --- Reads ----------------------------------------------------------------

    def get(self, kind: str, key: str) -> Any | None:
        with self._lock:
            record = self._records[kind].get(key)
            return copy.deepcopy(record) if record is not None else None

    def list_records(self, kind: str) -> list[Any]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._records[kind].values()]

    def next_sequence(self, prefix: str) -> int:
        with self._lock:
            value = self._sequences.get(prefix, 0) + 1
            self._sequences[prefix] = value
            return value

    # --- Writes ---------------------------------------------------------------

    def commit(self, writes: list[Write]) -> None:
        if not writes:
            return
        with self._lock:
            for w in writes:
                self._check(w)

            staged = {kind: dict(records) for kind, records in self._records.items()}
            for w in writes:
                if w.record is None:
                    del staged[w.kind][w.key]
                else:
                    version = (w.expected_version or 0) + 1
                    staged[w.kind][w.key] = replace(copy.deepcopy(w.record), version=version)

            self._flush(staged, dict(self._sequences))
            self._records = staged

    def _check(self, w: Write) -> None:
        current = self._records[w.kind].get(w.key)
        if w.expected_version is None:
            if current is not None:
                raise ConcurrencyConflict(f"{w.kind} '{w.key}' already exists")
            return
        if current is None:
            raise ConcurrencyConflict(f"{w.kind} '{w.key}' was removed concurrently")
        if current.version != w.expected_version:
            raise ConcurrencyConflict(
                f"{w.kind} '{w.key}' changed concurrently "
                f"(expected v{w.expected_version}, found v{current.version})"
            )

    def _flush(self, records: dict[str, dict[str, Any]], sequences: dict[str, int]) -> None:
        """Hook for durable subclasses; runs under the lock before the swap."""
