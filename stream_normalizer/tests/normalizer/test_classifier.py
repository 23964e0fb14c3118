"""Content classifier state machine: scenarios and edge cases."""

from __future__ import annotations

import logging

import pytest

from stream_normalizer.config.settings import NormalizerSettings
from stream_normalizer.normalizer.classifier import ContentClassifier
from stream_normalizer.normalizer.heuristics import CLARIFICATION_OPENING
from stream_normalizer.normalizer.wrappers import WrapperKind

from ..helpers import wrapper_counts


def _run(chunks, **settings_overrides):
    clf = ContentClassifier(NormalizerSettings(**settings_overrides))
    out = []
    for chunk in chunks:
        out.extend(clf.feed(chunk))
    out.extend(clf.finish())
    return clf, "".join(out)


def test_scenario_a_inline_clarification_is_terminal():
    clf = ContentClassifier(NormalizerSettings())
    first = "".join(clf.feed("Sure! Before I write this I need: campaign type? any offer? "))

    assert first == (  # nosec B101 - pytest assert in tests
        "<clarification_request>"
        f"{CLARIFICATION_OPENING}\n\n• Campaign type or goal\n• Offer or promotion"
        "</clarification_request>"
    )
    assert clf.stop_streaming is True  # nosec B101
    assert clf.feed("**HERO SECTION:** more text") == []  # nosec B101
    assert clf.finish() == []  # nosec B101


def test_scenario_b_preamble_discarded():
    clf, wire = _run(["Let me think...\n\n**HERO SECTION:**\nBuy now!"])
    assert wire == "<email_copy>**HERO SECTION:**\nBuy now!</email_copy>"  # nosec B101
    assert clf.state.trimmed_char_count > 0  # nosec B101
    assert clf.state.wrapper_opened_by_classifier is True  # nosec B101


def test_scenario_d_unclassified_text_becomes_non_copy_response():
    clf, wire = _run(["I can't help with that request."])
    assert wire == "<non_copy_response>I can't help with that request.</non_copy_response>"  # nosec B101
    assert clf.active_wrapper is WrapperKind.NON_COPY_RESPONSE  # nosec B101


def test_deliverable_split_across_chunks_is_forwarded_verbatim():
    clf, wire = _run(["Planning the email.", "\n\nSUBJECT: Spring", " sale is here", "!"])
    assert wire == "<email_copy>SUBJECT: Spring sale is here!</email_copy>"  # nosec B101
    assert clf.final_text == "SUBJECT: Spring sale is here!"  # nosec B101
    assert clf.content_started is True  # nosec B101


def test_in_band_tags_are_adopted_and_trailing_text_dropped():
    clf, wire = _run(["Thinking... <email_copy>Hero", " copy</email_", "copy> trailing junk", "more"])
    assert wire == "<email_copy>Hero copy</email_copy>"  # nosec B101
    assert clf.state.wrapper_opened_by_classifier is False  # nosec B101
    assert clf.state.trimmed_char_count == len("Thinking... ")  # nosec B101


def test_tagged_clarification_waits_for_closing_tag():
    clf = ContentClassifier(NormalizerSettings())
    assert clf.feed("<clarification_request>What is the primary goal") == []  # nosec B101
    wire = "".join(clf.feed("?</clarification_request>"))
    assert wire == (  # nosec B101
        f"<clarification_request>{CLARIFICATION_OPENING}\n\n• Campaign type or goal</clarification_request>"
    )


def test_unterminated_clarification_tag_resolved_at_finish():
    clf, wire = _run(["<clarification_request>Which audience should this target?"])
    assert wire.startswith("<clarification_request>")  # nosec B101
    assert "• Audience segment" in wire  # nosec B101
    assert clf.stop_streaming is True  # nosec B101


def test_empty_stream_still_yields_one_wrapper():
    settings = NormalizerSettings(empty_response_message="Nothing to show.")
    clf = ContentClassifier(settings)
    assert "".join(clf.finish()) == "<non_copy_response>Nothing to show.</non_copy_response>"  # nosec B101


def test_research_narration_is_cleaned_in_fallback():
    _, wire = _run(["Based on my research, ", "the brand has no spring line."])
    assert wire == "<non_copy_response>the brand has no spring line.</non_copy_response>"  # nosec B101


def test_preamble_buffer_is_bounded():
    clf = ContentClassifier(NormalizerSettings(preamble_cap=100))
    for _ in range(50):
        assert clf.feed("abcdefghij") == []  # nosec B101
        assert len(clf.state.preamble_buffer) <= 100  # nosec B101
    assert clf.state.trimmed_char_count == 400  # nosec B101


def test_abort_closes_once():
    clf = ContentClassifier(NormalizerSettings())
    clf.feed("SUBJECT: Hello")
    assert clf.abort() == ["</email_copy>"]  # nosec B101
    assert clf.abort() == []  # nosec B101
    assert clf.finish() == []  # nosec B101


def test_abort_before_content_emits_nothing():
    clf = ContentClassifier(NormalizerSettings())
    clf.feed("still thinking")
    assert clf.abort() == []  # nosec B101


def test_leak_warning_is_logged_not_raised(log_events):
    _run(["SUBJECT: Hi\n**A. Option one** from my analysis"])
    warnings = log_events("classify.leak_warning")
    assert warnings and warnings[0]["_level"] == logging.WARNING  # nosec B101


def test_fallback_is_logged_as_classification_ambiguous(log_events):
    _run(["I can't help with that request."])
    fallback = log_events("classify.fallback")[0]
    assert fallback["error_code"] == "classification_ambiguous"  # nosec B101


@pytest.mark.parametrize(
    "chunks",
    [
        [],
        ["   "],
        ["Hello there"],
        ["Let me think\n\n", "**HERO SECTION:**", " Big news"],
        ["<email_copy>SUBJECT: x</email_copy>", "</email_copy>"],
        ["<non_copy_response>Sorry, no.</non_copy_response>"],
        ["Please provide the target audience?"],
        ["SUBJECT: A\n", "Which products should I feature?"],
        ["Quick CTA idea below.\n\n<email_copy>SUBJECT: Hi", "</email_copy>"],
        ["Quick CTA idea below.\n\n", "<email_", "copy>SUBJECT: Hi"],
        ["SUBJECT: A\n", "<non_copy_response>oops", "</non_copy_response> more"],
        ["SUBJECT: A <email"],
        ["SUBJECT: A\nBody <clarification_request>Which products?", "</clarification_request>"],
    ],
)
def test_exactly_one_wrapper(chunks):
    _, wire = _run(chunks)
    counts = wrapper_counts(wire)
    opened = [tag for tag, (o, c) in counts.items() if o]
    assert len(opened) == 1  # nosec B101
    tag = opened[0]
    assert counts[tag] == (1, 1)  # nosec B101
    assert wire.startswith(f"<{tag}>") and wire.endswith(f"</{tag}>")  # nosec B101


def test_fallback_keeps_mid_sentence_research_phrases():
    _, wire = _run(["Here is what I found that might help: nothing, sorry."])
    assert wire == (  # nosec B101
        "<non_copy_response>Here is what I found that might help: nothing, sorry.</non_copy_response>"
    )


class TestInBandTagsWithMarkers:
    def test_marker_before_in_band_tag_adopts_the_tag(self):
        clf, wire = _run(["Quick CTA idea below.\n\n<email_copy>SUBJECT: Hi\nBody</email_copy>"])
        assert wire == "<email_copy>SUBJECT: Hi\nBody</email_copy>"  # nosec B101
        assert clf.state.wrapper_opened_by_classifier is False  # nosec B101
        assert clf.state.trimmed_char_count == len("Quick CTA idea below.\n\n")  # nosec B101

    def test_in_band_tag_after_synthesized_open_is_dropped(self):
        clf, wire = _run(["Quick CTA idea below.\n\n", "<email_", "copy>SUBJECT: Hi\nBody", "</email_copy>"])
        assert wire == "<email_copy>CTA idea below.\n\nSUBJECT: Hi\nBody</email_copy>"  # nosec B101
        assert clf.final_text == "CTA idea below.\n\nSUBJECT: Hi\nBody</email_copy>"  # nosec B101

    def test_other_wrapper_tags_inside_content_are_dropped(self):
        _, wire = _run(["SUBJECT: A\n", "<non_copy_response>oops", "</non_copy_response> more"])
        assert wire == "<email_copy>SUBJECT: A\noops more</email_copy>"  # nosec B101

    def test_lone_angle_bracket_is_forwarded_once_it_cannot_be_a_tag(self):
        clf = ContentClassifier(NormalizerSettings())
        assert clf.feed("SUBJECT: 2 <") == ["<email_copy>", "SUBJECT: 2 "]  # nosec B101
        assert clf.feed("3 items") == ["<3 items"]  # nosec B101

    def test_held_fragment_is_flushed_on_abort(self):
        clf = ContentClassifier(NormalizerSettings())
        clf.feed("SUBJECT: Hi <")
        assert clf.abort() == ["<", "</email_copy>"]  # nosec B101


class TestClarificationTagAfterDeliverable:
    def test_marker_before_tag_starts_email_immediately(self):
        clf = ContentClassifier(NormalizerSettings())
        out = clf.feed("SUBJECT: Hi\nBody <clarification_request>Which products?")
        assert out == ["<email_copy>", "SUBJECT: Hi\nBody Which products?"]  # nosec B101
        assert clf.active_wrapper is WrapperKind.EMAIL_COPY  # nosec B101
        assert clf.stop_streaming is False  # nosec B101

    def test_marker_after_tag_still_waits_for_closing_tag(self):
        clf = ContentClassifier(NormalizerSettings())
        assert clf.feed("<clarification_request>Should the CTA mention the sale") == []  # nosec B101
        wire = "".join(clf.feed("?</clarification_request>"))
        assert wire.startswith("<clarification_request>")  # nosec B101
        assert clf.stop_streaming is True  # nosec B101
