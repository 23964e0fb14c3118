"""Literal-only link recognizers.

Every recognizer returns URLs exactly as they appear in its input text
(minus trailing punctuation), so no URL is ever constructed or guessed.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple
from urllib.parse import unquote, urlparse

from ...base.models import ProductLink
from ...base.url_utils import strip_www

URL_PATTERN = re.compile(r"https?://[^\s<>\"{}|\\^`\[\]]+")
TRAILING_PUNCTUATION = re.compile(r"[.,;:!?)\]'\"]+$")
MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\(([^)\"\s]+)(?:\s+\"([^\"]+)\")?\)")
QUOTED_NAME_LINK = re.compile(
    r"[\"']([^\"'\n]{2,80})[\"']\s*(?:at|on|:|–|-|—)\s*(https?://[^\s<>\"{}|\\^`\[\]]+)"
)
TITLE_URL_LINE = re.compile(r"^\s*(.+?)\s+-\s+(https?://\S+)\s*$", re.MULTILINE)

PRODUCT_PATH = re.compile(
    r"/(?:products?|items?|shop|store|buy|collections?|p|articles?|blog|pages?)(?:/|$)",
    re.IGNORECASE,
)


def clean_url(url: str) -> str:
    """Strip trailing sentence punctuation from a matched URL."""
    return TRAILING_PUNCTUATION.sub("", url.strip())


def iter_urls(text: str) -> Iterator[str]:
    for match in URL_PATTERN.finditer(text or ""):
        url = clean_url(match.group(0))
        if urlparse(url).hostname:
            yield url


def is_product_url(url: str, site_host: Optional[str] = None) -> bool:
    """Whether ``url`` points at a product-like page or the reference site."""
    parsed = urlparse(url)
    host = parsed.hostname or ""
    if site_host and strip_www(host.lower()) == strip_www(site_host.lower()):
        return True
    return bool(PRODUCT_PATH.search(parsed.path or ""))


def name_from_url(url: str) -> str:
    """Derive a display name from the last path segment, else the host."""
    parsed = urlparse(url)
    segments = [s for s in (parsed.path or "").split("/") if s]
    if segments:
        slug = unquote(segments[-1]).rsplit(".", 1)[0]
        words = [w for w in re.split(r"[-_+]+", slug) if w]
        if words and not slug.isdigit():
            return " ".join(w.capitalize() for w in words)
    return strip_www(parsed.hostname or url)


def markdown_links(text: str) -> List[ProductLink]:
    """``[name](url "description")`` links."""
    out: List[ProductLink] = []
    for m in MARKDOWN_LINK.finditer(text or ""):
        url = clean_url(m.group(2))
        if not urlparse(url).scheme.startswith("http"):
            continue
        out.append(ProductLink(name=m.group(1).strip(), url=url, description=m.group(3)))
    return out


def quoted_links(text: str) -> List[ProductLink]:
    """``"Name": https://...`` or ``'Name' at https://...`` pairs."""
    return [
        ProductLink(name=m.group(1).strip(), url=clean_url(m.group(2)))
        for m in QUOTED_NAME_LINK.finditer(text or "")
    ]


def title_lines(text: str) -> List[Tuple[str, str]]:
    """``title - url`` lines as produced by flattened search results."""
    return [(m.group(1).strip(), clean_url(m.group(2))) for m in TITLE_URL_LINE.finditer(text or "")]


def product_urls(text: str, site_host: Optional[str] = None) -> List[str]:
    """Product-shaped bare URLs found in ``text``."""
    return [url for url in iter_urls(text) if is_product_url(url, site_host)]


__all__ = [
    "URL_PATTERN",
    "clean_url",
    "iter_urls",
    "is_product_url",
    "name_from_url",
    "markdown_links",
    "quoted_links",
    "title_lines",
    "product_urls",
]
