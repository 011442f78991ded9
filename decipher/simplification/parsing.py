"""Validate the model's JSON output against the rephrase contract."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from pydantic import BaseModel, ValidationError

from decipher.simplification.models import Segment

logger = logging.getLogger(__name__)

NEUTRAL_CONFIDENCE = 50
MALFORMED_SUMMARY = "Summary unavailable: the AI response could not be read."


class RawSegment(BaseModel):
    """One unscored rewrite row as returned by the model."""

    original: str
    simplified: str


class SimplificationPayload(BaseModel):
    rephrased: list[RawSegment]
    summary: str


@dataclass
class ParsedOutput:
    """Either a validated payload or the degraded single-segment fallback."""

    payload: SimplificationPayload | None
    fallback: Segment | None = None
    summary: str = ""


def strip_code_fences(text: str) -> str:
    """Remove markdown ``` fences some models wrap around JSON."""
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        lines = [ln for ln in lines if not ln.strip().startswith("```")]
        text = "\n".join(lines)
    return text.strip()


def parse_simplification(raw_text: str, source_text: str) -> ParsedOutput:
    """Parse model output into a payload, degrading instead of failing.

    Args:
        raw_text: The text returned by the model.
        source_text: The text that was sent for simplification.

    Returns:
        A :class:`ParsedOutput`. When the output is not JSON or breaks the
        schema, ``payload`` is None and ``fallback`` holds the raw text as a
        single neutral-confidence segment.
    """
    try:
        data = json.loads(strip_code_fences(raw_text))
        payload = SimplificationPayload.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Model output did not match the rephrase schema: %s", exc)
        return ParsedOutput(
            payload=None,
            fallback=Segment(
                original=source_text,
                simplified=raw_text.strip(),
                confidence=NEUTRAL_CONFIDENCE,
            ),
            summary=MALFORMED_SUMMARY,
        )

    return ParsedOutput(payload=payload, summary=payload.summary)
