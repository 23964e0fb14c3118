"""IMemoryStore Protocol (single-class module).

The external memory collaborator this subsystem calls after a stream
completes. Only the write side is needed here.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IMemoryStore(Protocol):
    """Idempotent fact storage keyed by conversation and fact key."""

    def store_fact(
        self,
        conversation_id: str,
        key: str,
        value: str,
        category: str,
    ) -> None:  # pragma: no cover - interface
        """Create or replace the fact ``key`` for ``conversation_id``.

        Raises
        ------
        MemoryStoreFailure
            When the fact cannot be stored. Callers log and continue.
        """
        ...
