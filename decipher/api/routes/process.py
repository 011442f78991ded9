"""Processing endpoint: simplify page text or answer a question about it."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from decipher.api.models import (
    ChatResponse,
    ErrorResponse,
    ProcessMode,
    ProcessRequest,
    ProcessResponse,
    SegmentResponse,
)
from decipher.simplification.service import SimplificationService, get_simplification_service

router = APIRouter()


@router.post(
    "/api/ai-process",
    response_model=ProcessResponse | ChatResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def process(
    request: ProcessRequest,
    service: Annotated[SimplificationService, Depends(get_simplification_service)],
) -> ProcessResponse | ChatResponse:
    """Simplify text (standard mode) or answer a question about it (chat mode).

    In chat mode ``inputText`` is the question and ``context`` the document.
    Failures are turned into ``{"error": ...}`` bodies by the handlers
    registered in :mod:`decipher.api.main`.
    """
    if request.mode is ProcessMode.CHAT:
        answer = await service.ask(request.input_text or "", request.context or "")
        return ChatResponse(answer=answer.answer, model_used=answer.model_used)

    result = await service.simplify(request.input_text or "", request.reading_level)
    return ProcessResponse(
        rephrased=[SegmentResponse.from_segment(s) for s in result.segments],
        summary=result.summary,
        model_used=result.model_used,
    )
