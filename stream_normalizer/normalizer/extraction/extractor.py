"""Side-channel extractor.

Runs once after the stream closes. Memory directives are parsed from the
final text and forwarded to the memory store; product links are recovered
from the final text, the reasoning trace and the flattened tool results.
Link recognition is literal-only: each URL in the result appears verbatim
in one of those three inputs.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ...base.errors import ExtractionFailure
from ...base.interfaces import IMemoryStore
from ...base.log_support import LogContext
from ...base.logging import get_logger, normalized_log_event
from ...base.models import ExtractionResult, ProductLink
from ...base.url_utils import website_host
from .directives import parse_directives, store_directives
from .links import is_product_url, markdown_links, name_from_url, product_urls, quoted_links, title_lines


class _LinkCollector:
    """Ordered, URL-deduplicated link accumulator."""

    def __init__(self) -> None:
        self._by_url: Dict[str, ProductLink] = {}

    def add(self, link: ProductLink) -> None:
        if link.url and link.url not in self._by_url:
            self._by_url[link.url] = link

    def add_url(self, url: str, name: Optional[str] = None) -> None:
        label = name or name_from_url(url)
        self.add(ProductLink(name=label, url=url, description=f"View {label}"))

    def links(self) -> List[ProductLink]:
        return list(self._by_url.values())


class SideChannelExtractor:
    """Recover product links and memory directives after a stream.

    Args:
        memory_store: Collaborator receiving ``store_fact`` calls; optional.
        website_url: Reference website; its host counts as product-shaped.
        logger: Logger for extraction and memory events.
        ctx: Shared stream logging context.
    """

    def __init__(
        self,
        memory_store: Optional[IMemoryStore] = None,
        website_url: Optional[str] = None,
        *,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._store = memory_store
        self._site_host = website_host(website_url)
        self._logger = logger or get_logger("normalizer.extraction")
        self._ctx = ctx

    def save_directives(self, final_text: str, conversation_id: Optional[str]) -> int:
        """Parse and store memory directives; return the count saved."""
        return store_directives(parse_directives(final_text), self._store, conversation_id, self._logger, self._ctx)

    def extract_links(self, final_text: str, reasoning_text: str = "", tool_text: str = "") -> ExtractionResult:
        """Return the deduplicated links; failures degrade to an empty result."""
        try:
            links = self._collect(final_text or "", reasoning_text or "", tool_text or "")
        except ExtractionFailure as exc:
            self._log_error(exc)
            return ExtractionResult()
        except Exception as exc:  # noqa: BLE001 - extraction never aborts the response
            self._log_error(ExtractionFailure(str(exc)))
            return ExtractionResult()
        result = ExtractionResult(product_links=links)
        normalized_log_event(
            self._logger,
            "extract.links",
            self._ctx,
            phase="finalize",
            emitted=not result.is_empty(),
            count=len(links),
        )
        return result

    def _collect(self, final_text: str, reasoning_text: str, tool_text: str) -> List[ProductLink]:
        collector = _LinkCollector()
        lowered_final = final_text.lower()

        # Search result titles mentioned in the answer name their links best.
        for title, url in title_lines(tool_text):
            if title.lower() in lowered_final or is_product_url(url, self._site_host):
                collector.add_url(url, title)

        for link in markdown_links(final_text):
            collector.add(link)
        for link in quoted_links(final_text):
            collector.add(link)
        for url in product_urls(final_text, self._site_host):
            collector.add_url(url)

        # Secondary pass over the side channels.
        side_text = "\n\n".join(t for t in (tool_text, reasoning_text) if t)
        for link in markdown_links(side_text):
            if is_product_url(link.url, self._site_host):
                collector.add(link)
        for url in product_urls(side_text, self._site_host):
            collector.add_url(url)
        return collector.links()

    def _log_error(self, exc: ExtractionFailure) -> None:
        normalized_log_event(
            self._logger,
            "extract.error",
            self._ctx,
            phase="finalize",
            level=logging.WARNING,
            error_code=exc.code.value,
            emitted=False,
            error=str(exc),
        )


__all__ = ["SideChannelExtractor"]
