"""Named heuristic predicates, each tested in isolation."""

from __future__ import annotations

import pytest

from stream_normalizer.normalizer.heuristics import (
    CLARIFICATION_OPENING,
    ClarificationPolicy,
    build_clarification_message,
    clarification_body,
    contains_analysis_leak,
    find_deliverable_marker,
    find_deliverable_start,
    find_explicit_wrapper,
    looks_like_clarification,
    missing_fields,
)
from stream_normalizer.normalizer.wrappers import WrapperKind


class TestLooksLikeClarification:
    def test_phrase_with_trailing_question(self):
        assert looks_like_clarification("Before I write this, what is the campaign type?")  # nosec B101

    def test_question_without_missing_input_phrase_is_not_clarification(self):
        assert not looks_like_clarification("Ready to shop the spring sale?")  # nosec B101

    def test_phrase_without_trailing_question_is_not_clarification(self):
        assert not looks_like_clarification("The campaign type is a seasonal launch.")  # nosec B101

    def test_question_must_be_near_the_end(self):
        text = "Please provide the offer? " + "x" * 200
        assert not looks_like_clarification(text)  # nosec B101

    def test_explicit_tag_always_matches(self):
        assert looks_like_clarification("<clarification_request>Which audience.")  # nosec B101

    def test_policy_is_tunable(self):
        strict = ClarificationPolicy(phrases=("need more information",))
        assert not looks_like_clarification("Which products should I feature?", strict)  # nosec B101
        loose = ClarificationPolicy(require_question=False)
        assert looks_like_clarification("Please provide the target audience.", loose)  # nosec B101


class TestFindDeliverableStart:
    def test_no_marker(self):
        assert find_deliverable_start("Let me think about the brand voice first.") == -1  # nosec B101

    def test_walks_back_to_paragraph_break(self):
        text = "Let me think...\n\n**HERO SECTION:**\nBuy now!"
        assert find_deliverable_start(text) == len("Let me think...\n\n")  # nosec B101

    def test_walks_back_to_line_break_without_paragraph(self):
        text = "Analysis done\nEMAIL 1: **HERO SECTION:**"
        assert find_deliverable_start(text) == len("Analysis done\n")  # nosec B101

    def test_keeps_label_in_same_paragraph(self):
        text = "Notes\n\nEMAIL 1\nSUBJECT: Spring is here"
        assert find_deliverable_start(text) == len("Notes\n\n")  # nosec B101

    def test_marker_at_start(self):
        assert find_deliverable_start("SUBJECT LINE: Hello") == 0  # nosec B101

    @pytest.mark.parametrize(
        "marker",
        ["EMAIL SUBJECT LINE:", "**Headline:**", "Section Title:", "FINAL CTA SECTION:", "PREVIEW TEXT:"],
    )
    def test_known_markers(self, marker):
        assert find_deliverable_start(f"intro\n\n{marker} x") == len("intro\n\n")  # nosec B101

    def test_case_insensitive(self):
        assert find_deliverable_start("hero section: big news") == 0  # nosec B101

    def test_marker_offset_is_not_walked_back(self):
        text = "Notes\nQuick note on the CTA"
        assert find_deliverable_marker(text) == text.index("CTA")  # nosec B101
        assert find_deliverable_start(text) == len("Notes\n")  # nosec B101
        assert find_deliverable_marker("intro\nSUBJECT: x") == len("intro\n")  # nosec B101


def test_find_explicit_wrapper_picks_earliest_tag():
    text = "thinking...<non_copy_response>Sorry</non_copy_response><email_copy>"
    assert find_explicit_wrapper(text) == (WrapperKind.NON_COPY_RESPONSE, len("thinking..."))  # nosec B101
    assert find_explicit_wrapper("no tags here") is None  # nosec B101


class TestClarificationMessage:
    def test_lists_only_detected_fields(self):
        message = build_clarification_message("I need: campaign type? any offer?")
        assert message == (  # nosec B101
            f"{CLARIFICATION_OPENING}\n\n• Campaign type or goal\n• Offer or promotion"
        )

    def test_falls_back_to_all_fields(self):
        assert len(missing_fields("Could you say more?")) == 5  # nosec B101

    def test_body_strips_explicit_tags(self):
        raw = "preamble <clarification_request> Which audience? </clarification_request> trailing"
        assert clarification_body(raw) == "Which audience?"  # nosec B101


def test_contains_analysis_leak_checks_leading_window_only():
    assert contains_analysis_leak("**A. Bold option**\nSubject: hi", 400)  # nosec B101
    assert contains_analysis_leak("Here is my strategic analysis of the brand", 400)  # nosec B101
    late = "x" * 500 + "**A. Bold option**"
    assert not contains_analysis_leak(late, 400)  # nosec B101
