"""Tests for sentence segmentation."""

from __future__ import annotations

from decipher.text.segmenter import segment_sentences, segments_from_sentences


class TestSegmentSentences:
    def test_concrete_scenario(self) -> None:
        assert segment_sentences("The cat sat on the mat. It was happy.") == [
            "The cat sat on the mat.",
            "It was happy.",
        ]

    def test_empty_string(self) -> None:
        assert segment_sentences("") == []

    def test_no_terminal_punctuation(self) -> None:
        assert segment_sentences("  a fragment without an ending  ") == ["a fragment without an ending"]

    def test_short_fragment_dropped(self) -> None:
        assert segment_sentences("Hi.") == []

    def test_multiple_terminators_kept_together(self) -> None:
        assert segment_sentences("Really?! Yes... Fine.") == ["Really?!", "Yes...", "Fine."]

    def test_trailing_fragment(self) -> None:
        assert segment_sentences("First one. and then some") == ["First one.", "and then some"]

    def test_line_start_ordinals_stripped(self) -> None:
        text = "1. Open the box.\n2. Take out the book."
        assert segment_sentences(text) == ["Open the box.", "Take out the book."]

    def test_bullets_stripped(self) -> None:
        text = "• Read slowly.\n* Take breaks."
        assert segment_sentences(text) == ["Read slowly.", "Take breaks."]

    def test_residual_ordinal_dropped(self) -> None:
        # "2023." would survive the length filter but is only a number.
        assert segment_sentences("The year was over. 2023.") == ["The year was over."]

    def test_source_order_preserved(self) -> None:
        text = "Zebras run fast. Apples are red. Mice are small."
        assert segment_sentences(text) == ["Zebras run fast.", "Apples are red.", "Mice are small."]

    def test_idempotent_on_clean_sentences(self) -> None:
        sentences = ["The cat sat on the mat.", "It was happy.", "Then it slept"]
        once = segment_sentences(" ".join(sentences))
        assert once == sentences
        assert segment_sentences(" ".join(once)) == once

    def test_deterministic(self) -> None:
        text = "One thing. Two things! Three things?"
        assert segment_sentences(text) == segment_sentences(text)


class TestSegmentsFromSentences:
    def test_plain_segments_fully_trusted(self) -> None:
        segments = segments_from_sentences(["The cat sat on the mat.", "It was happy."])
        assert [s.simplified for s in segments] == ["The cat sat on the mat.", "It was happy."]
        assert all(s.original == s.simplified for s in segments)
        assert all(s.confidence == 100 and s.reason is None for s in segments)
