"""Pydantic request/response schemas for the Decipher API.

Field names are camelCase on the wire to match the reader front end.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from decipher.simplification.models import Segment


class ProcessMode(StrEnum):
    STANDARD = "standard"
    CHAT = "chat"


class ProcessRequest(BaseModel):
    """Request body for the /api/ai-process endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    input_text: str | None = Field(default=None, alias="inputText")
    reading_level: str | None = Field(default=None, alias="readingLevel")
    mode: ProcessMode = ProcessMode.STANDARD
    context: str | None = None


class SegmentResponse(BaseModel):
    """A single verified segment."""

    original: str
    simplified: str
    confidence: int
    reason: str | None = None

    @classmethod
    def from_segment(cls, segment: Segment) -> SegmentResponse:
        return cls(
            original=segment.original,
            simplified=segment.simplified,
            confidence=segment.confidence,
            reason=segment.reason,
        )


class ProcessResponse(BaseModel):
    """Response body for standard (simplification) mode."""

    model_config = ConfigDict(populate_by_name=True)

    rephrased: list[SegmentResponse]
    summary: str
    model_used: str = Field(alias="modelUsed")


class ChatResponse(BaseModel):
    """Response body for chat mode."""

    model_config = ConfigDict(populate_by_name=True)

    answer: str
    model_used: str = Field(alias="modelUsed")


class ErrorResponse(BaseModel):
    error: str
