"""Small URL helpers shared by adapters and link extraction."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse


def website_host(website_url: Optional[str]) -> Optional[str]:
    """Return the hostname of ``website_url`` or ``None`` when unusable.

    Only absolute ``http``/``https`` URLs qualify.
    """
    if not website_url:
        return None
    try:
        parsed = urlparse(website_url.strip())
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return None
    return parsed.hostname


def strip_www(host: str) -> str:
    return host[4:] if host.lower().startswith("www.") else host


__all__ = ["website_host", "strip_www"]
