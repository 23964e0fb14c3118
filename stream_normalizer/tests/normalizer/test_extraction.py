"""Side-channel extraction: literal-only product links and memory directives."""

from __future__ import annotations

import logging

import pytest

from stream_normalizer.base.memory import InMemoryFactStore
from stream_normalizer.base.models import MemoryDirective
from stream_normalizer.normalizer.extraction import (
    SideChannelExtractor,
    is_product_url,
    name_from_url,
    parse_directives,
    store_directives,
)
from stream_normalizer.normalizer.extraction import extractor as extractor_module

SITE = "https://shop.example.com"


def test_search_title_mentioned_in_answer_names_the_link():
    tool_text = "Product X - https://shop.example.com/products/x\nOther - https://news.example.org/story"
    result = SideChannelExtractor(website_url=SITE).extract_links("Feature Product X in the hero.", "", tool_text)

    assert [link.to_dict() for link in result.product_links] == [  # nosec B101 - pytest assert in tests
        {"name": "Product X", "url": "https://shop.example.com/products/x", "description": "View Product X"}
    ]


def test_markdown_quoted_and_bare_links_from_final_text():
    final = (
        '[Spring Tee](https://brand.example/products/spring-tee "Soft cotton") and '
        '"Linen Shirt": https://brand.example/p/linen-shirt plus '
        "https://brand.example/collections/blue_denim-jacket."
    )
    links = SideChannelExtractor().extract_links(final).product_links

    assert [(l.name, l.url, l.description) for l in links] == [  # nosec B101
        ("Spring Tee", "https://brand.example/products/spring-tee", "Soft cotton"),
        ("Linen Shirt", "https://brand.example/p/linen-shirt", None),
        ("Blue Denim Jacket", "https://brand.example/collections/blue_denim-jacket", "View Blue Denim Jacket"),
    ]


def test_links_are_deduplicated_by_url():
    url = "https://brand.example/products/tee"
    final = f"[Tee]({url}) and again {url}"
    result = SideChannelExtractor().extract_links(final, reasoning_text=f"I saw {url}", tool_text=f"Tee - {url}")
    assert result.urls() == [url]  # nosec B101


@pytest.mark.parametrize(
    "final, reasoning, tools",
    [
        ("Shop the Spring Tee today!", "Thinking about the Spring Tee", ""),
        ("SUBJECT: Sale", "", "Brand news - https://news.example.org/story"),
        ("", "", ""),
    ],
)
def test_never_invents_urls(final, reasoning, tools):
    result = SideChannelExtractor(website_url=SITE).extract_links(final, reasoning, tools)
    assert result.is_empty()  # nosec B101


def test_every_url_is_literally_present():
    final = "Meet the tee https://shop.example.com/products/tee!"
    reasoning = "Compare with https://shop.example.com/collections/summer and https://example.org/about"
    tools = "Summer - https://shop.example.com/collections/summer\nhttps://shop.example.com/"
    result = SideChannelExtractor(website_url=SITE).extract_links(final, reasoning, tools)

    corpus = "\n".join((final, reasoning, tools))
    assert result.urls()  # nosec B101
    assert all(url in corpus for url in result.urls())  # nosec B101
    assert "https://example.org/about" not in result.urls()  # nosec B101


def test_side_channel_markdown_links_must_be_product_shaped():
    reasoning = "[Blog](https://other.example/about) [Tee](https://other.example/products/tee)"
    result = SideChannelExtractor().extract_links("Hello", reasoning_text=reasoning)
    assert result.urls() == ["https://other.example/products/tee"]  # nosec B101


def test_extraction_failure_degrades_to_no_links(monkeypatch, log_events):
    def _boom(text):
        raise ValueError("regex exploded")

    monkeypatch.setattr(extractor_module, "markdown_links", _boom)
    result = SideChannelExtractor().extract_links("[Tee](https://brand.example/products/tee)")

    assert result.is_empty()  # nosec B101
    event = log_events("extract.error")[0]
    assert event["error_code"] == "extraction_failure"  # nosec B101
    assert event["_level"] == logging.WARNING  # nosec B101


@pytest.mark.parametrize(
    "url, site, expected",
    [
        ("https://any.example/products/tee", None, True),
        ("https://any.example/shop", None, True),
        ("https://any.example/about", None, False),
        ("https://www.brand.example/about", "brand.example", True),
    ],
)
def test_is_product_url(url, site, expected):
    assert is_product_url(url, site) is expected  # nosec B101


def test_name_from_url_falls_back_to_host():
    assert name_from_url("https://www.brand.example/") == "brand.example"  # nosec B101
    assert name_from_url("https://brand.example/products/123") == "brand.example"  # nosec B101
    assert name_from_url("https://brand.example/p/cozy-socks.html") == "Cozy Socks"  # nosec B101


class TestDirectives:
    def test_parse(self):
        text = "Done. [REMEMBER:tone=playful:brand_context] and [REMEMBER:launch=May 1:campaign_info]"
        assert parse_directives(text) == [  # nosec B101
            MemoryDirective("tone", "playful", "brand_context"),
            MemoryDirective("launch", "May 1", "campaign_info"),
        ]

    def test_one_failure_does_not_block_the_rest(self, log_events):
        store = InMemoryFactStore()
        directives = parse_directives("[REMEMBER:a=1:bogus][REMEMBER:b=2:fact]")
        saved = store_directives(directives, store, "conv-1", logging.getLogger("stream_normalizer.test"))

        assert saved == 1  # nosec B101
        assert store.get_fact("conv-1", "b")["value"] == "2"  # nosec B101
        assert store.get_fact("conv-1", "a") is None  # nosec B101
        errors = log_events("memory.error")
        assert len(errors) == 1 and errors[0]["error_code"] == "memory_store_failure"  # nosec B101

    def test_unexpected_store_errors_are_isolated(self, log_events):
        class _FlakyStore:
            def __init__(self):
                self.keys = []

            def store_fact(self, conversation_id, key, value, category):
                if key == "bad":
                    raise RuntimeError("database is locked")
                self.keys.append(key)

        store = _FlakyStore()
        extractor = SideChannelExtractor(store)
        assert extractor.save_directives("[REMEMBER:bad=x:fact][REMEMBER:good=y:fact]", "conv-1") == 1  # nosec B101
        assert store.keys == ["good"]  # nosec B101
        assert log_events("memory.error")[0]["error"] == "database is locked"  # nosec B101

    def test_nothing_stored_without_conversation_id(self):
        store = InMemoryFactStore()
        assert SideChannelExtractor(store).save_directives("[REMEMBER:a=1:fact]", None) == 0  # nosec B101
        assert store.list_facts("") == []  # nosec B101


def test_scenario_c_title_match_without_reference_site():
    result = SideChannelExtractor().extract_links(
        "Meet Product X, our bestseller.", tool_text="Product X - https://shop.example/x"
    )
    assert result.urls() == ["https://shop.example/x"]  # nosec B101
    assert result.product_links[0].name == "Product X"  # nosec B101
