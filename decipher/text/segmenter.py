"""Sentence segmentation for raw and simplified text."""

from __future__ import annotations

import re

from decipher.simplification.models import Segment

_LINE_ORDINAL = re.compile(r"^\d+\.\s*", re.MULTILINE)
_INLINE_ORDINAL = re.compile(r"\n\d+\.\s*")
_BULLET = re.compile(r"[*•-]\s*")
_SENTENCE = re.compile(r"[^.!?]+[.!?]+|[^.!?]+$")
_RESIDUAL_ORDINAL = re.compile(r"^\d+\.?$")

# Pieces this short are punctuation debris, not sentences.
MIN_SENTENCE_CHARS = 4


def _strip_markers(text: str) -> str:
    """Remove list numbering and bullet glyphs."""
    text = _LINE_ORDINAL.sub("", text)
    text = _INLINE_ORDINAL.sub(" ", text)
    return _BULLET.sub("", text)


def segment_sentences(text: str) -> list[str]:
    """Split *text* into trimmed sentences in source order.

    Each sentence is the longest run of non-terminal characters followed by
    one or more of ``.``, ``!`` or ``?``; a trailing run without terminal
    punctuation is kept as the final fragment.

    Args:
        text: Raw page text or the simplified rewrite.

    Returns:
        List of sentences longer than 3 characters.
    """
    if not text:
        return []

    cleaned = _strip_markers(text)
    pieces = _SENTENCE.findall(cleaned) or [cleaned]

    sentences: list[str] = []
    for piece in pieces:
        sentence = piece.strip()
        if len(sentence) < MIN_SENTENCE_CHARS:
            continue
        if _RESIDUAL_ORDINAL.match(sentence):
            continue
        sentences.append(sentence)
    return sentences


def segments_from_sentences(sentences: list[str]) -> list[Segment]:
    """Wrap plain sentences as segments for the no-rewrite reading path.

    The text is read as-is, so each sentence is its own original and is
    fully trusted.
    """
    return [Segment(original=s, simplified=s, confidence=100) for s in sentences]
