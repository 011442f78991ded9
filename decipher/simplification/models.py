"""Data models for simplification results and model attempts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal


class ConfidenceBand(StrEnum):
    """Trust signal shown to the reader for a segment."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Lower bounds (inclusive) of the high and medium bands.
HIGH_CONFIDENCE = 90
MEDIUM_CONFIDENCE = 70


@dataclass(frozen=True)
class Segment:
    """One scored (original, simplified) pair."""

    original: str
    simplified: str
    confidence: int  # 0 - 100
    reason: str | None = None

    @property
    def band(self) -> ConfidenceBand:
        if self.confidence >= HIGH_CONFIDENCE:
            return ConfidenceBand.HIGH
        if self.confidence >= MEDIUM_CONFIDENCE:
            return ConfidenceBand.MEDIUM
        return ConfidenceBand.LOW


@dataclass(frozen=True)
class ModelAttempt:
    """A failed call to one model in the fallback chain."""

    model: str
    error: str


@dataclass(frozen=True)
class GenerationSuccess:
    text: str
    model_used: str
    kind: Literal["success"] = "success"


@dataclass(frozen=True)
class GenerationFailure:
    attempts: list[ModelAttempt] = field(default_factory=list)
    kind: Literal["failure"] = "failure"


GenerationResult = GenerationSuccess | GenerationFailure


@dataclass
class SimplificationResult:
    """Verified segments plus summary for one (text, level) request."""

    segments: list[Segment]
    summary: str
    model_used: str


@dataclass
class ChatAnswer:
    answer: str
    model_used: str
