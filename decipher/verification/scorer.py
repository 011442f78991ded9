"""Grounding and confidence scoring for simplified segments.

Three cheap signals, none of them a proof:
- Grounding: the claimed quote must appear in the source text.
- Entailment: a zero-shot NLI model rates the rewrite as a restatement of
  the original sentence.
- Length ratio: a rewrite much longer than its source likely adds detail.

Scores are surfaced to the reader as a trust signal and never used to hide
text.
"""

from __future__ import annotations

import asyncio
import logging
import re

from decipher.simplification.models import Segment
from decipher.simplification.parsing import NEUTRAL_CONFIDENCE, RawSegment
from decipher.verification.entailment import ENTAILMENT_TEMPLATE, EntailmentClassifier

logger = logging.getLogger(__name__)

# Tunable heuristics; values kept for compatibility with existing scores.
GROUNDING_PREFIX_CHARS = 20
LENGTH_RATIO_LIMIT = 2
LENGTH_PENALTY = 20

UNGROUNDED_CONFIDENCE = 0
QUOTE_NOT_FOUND = "Quote not found"

_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lowercase and collapse whitespace runs to single spaces."""
    return _WHITESPACE.sub(" ", text.lower()).strip()


def is_grounded(source_text: str, original: str) -> bool:
    """Check that the quote's normalized prefix occurs in the source.

    Only the first :data:`GROUNDING_PREFIX_CHARS` characters are compared,
    so minor differences near the end of a quote are tolerated. An empty
    quote is never grounded.
    """
    prefix = normalize(original)[:GROUNDING_PREFIX_CHARS]
    if not prefix:
        return False
    return prefix in normalize(source_text)


def _clamp_confidence(value: float) -> int:
    return max(0, min(100, round(value)))


def apply_length_penalty(score: float, original: str, simplified: str) -> int:
    """Subtract the length penalty when the rewrite is over twice as long."""
    if len(simplified) > LENGTH_RATIO_LIMIT * len(original):
        score -= LENGTH_PENALTY
    return _clamp_confidence(score)


async def score_segment(
    source_text: str,
    raw: RawSegment,
    classifier: EntailmentClassifier,
) -> Segment:
    """Assign a 0-100 confidence to one rewrite.

    Classifier failures yield the neutral confidence instead of an error.
    """
    if not is_grounded(source_text, raw.original):
        return Segment(
            original=raw.original,
            simplified=raw.simplified,
            confidence=UNGROUNDED_CONFIDENCE,
            reason=QUOTE_NOT_FOUND,
        )

    try:
        scores = await classifier.classify(raw.original, [raw.simplified], ENTAILMENT_TEMPLATE)
        entailment = float(scores[0]) * 100
    except Exception:
        logger.exception("Entailment check failed; using neutral confidence")
        return Segment(
            original=raw.original,
            simplified=raw.simplified,
            confidence=NEUTRAL_CONFIDENCE,
        )

    return Segment(
        original=raw.original,
        simplified=raw.simplified,
        confidence=apply_length_penalty(entailment, raw.original, raw.simplified),
    )


async def verify(
    source_text: str,
    segments: list[RawSegment],
    classifier: EntailmentClassifier,
) -> list[Segment]:
    """Score all segments concurrently, preserving input order."""
    return list(
        await asyncio.gather(*(score_segment(source_text, raw, classifier) for raw in segments))
    )
