"""ProviderAdapter Protocol (single-class module).

Strategy interface implemented once per provider dialect.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Protocol, runtime_checkable

from ..models import NormalizeRequest
from ..streaming.events import ParsedEvent


@runtime_checkable
class ProviderAdapter(Protocol):
    """Builds provider-shaped parameters, opens the raw stream, parses events.

    Implementations must not retry; any upstream failure is raised as
    ``ProviderUnavailable``.
    """

    @property
    def provider_name(self) -> str:  # pragma: no cover - interface
        """Canonical provider name used for logging."""
        ...

    def build_params(self, request: NormalizeRequest) -> Dict[str, Any]:  # pragma: no cover - interface
        """Return the keyword arguments for the provider's streaming call."""
        ...

    def open_stream(self, request: NormalizeRequest) -> Iterable[Any]:  # pragma: no cover - interface
        """Open the provider's incremental event source."""
        ...

    def parse_event(self, raw: Any) -> Optional[ParsedEvent]:  # pragma: no cover - interface
        """Translate one raw provider event (``None`` when not actionable)."""
        ...
