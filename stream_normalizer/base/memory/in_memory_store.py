"""In-memory implementation of IMemoryStore.

Reference implementation for development and tests. Facts are upserted by
``(conversation_id, key)`` so replaying the same directive is harmless.
"""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Optional

from ..errors import MemoryStoreFailure
from ..models import MEMORY_CATEGORIES


class InMemoryFactStore:
    """Dictionary-backed fact store.

    Thread safety: guarded by a lock, since concurrent streams may finish at
    the same time and write through the same store.
    """

    def __init__(self) -> None:
        self._facts: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = Lock()

    def store_fact(self, conversation_id: str, key: str, value: str, category: str) -> None:
        """Create or replace a fact.

        Raises
        ------
        MemoryStoreFailure
            On an empty conversation id or key, or an unknown category.
        """
        if not conversation_id or not key:
            raise MemoryStoreFailure("conversation_id and key are required")
        if category not in MEMORY_CATEGORIES:
            raise MemoryStoreFailure(f"unknown memory category: {category!r}")
        now = datetime.now(timezone.utc).isoformat()
        with self._lock:
            facts = self._facts.setdefault(conversation_id, {})
            created = facts.get(key, {}).get("created_at", now)
            facts[key] = {
                "key": key,
                "value": value,
                "category": category,
                "created_at": created,
                "updated_at": now,
            }

    def get_fact(self, conversation_id: str, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            entry = self._facts.get(conversation_id, {}).get(key)
            return dict(entry) if entry else None

    def list_facts(self, conversation_id: str) -> List[Dict[str, Any]]:
        """Return the facts of a conversation, most recently updated first."""
        with self._lock:
            entries = [dict(e) for e in self._facts.get(conversation_id, {}).values()]
        return sorted(entries, key=lambda e: e["updated_at"], reverse=True)

    def clear_conversation(self, conversation_id: str) -> None:
        with self._lock:
            self._facts.pop(conversation_id, None)


__all__ = ["InMemoryFactStore"]
