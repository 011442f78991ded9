"""Ordered model fallback: try each model once, return the first success."""

from __future__ import annotations

import logging
import time

from decipher.errors import AllModelsFailedError
from decipher.simplification.backends import LLMBackend
from decipher.simplification.models import (
    GenerationFailure,
    GenerationResult,
    GenerationSuccess,
    ModelAttempt,
)

logger = logging.getLogger(__name__)

EMPTY_RESPONSE = "Empty response"


class ModelFallbackInvoker:
    """Call models strictly in priority order until one answers.

    Only one model is in flight at a time and a model is never retried;
    any error (quota, network, bad output) moves on to the next candidate.
    """

    def __init__(self, models: list[str], backend: LLMBackend) -> None:
        self.models = list(models)
        self.backend = backend

    async def attempt(self, prompt: str, *, json_output: bool = False) -> GenerationResult:
        """Run the chain and return a tagged success/failure result."""
        attempts: list[ModelAttempt] = []

        for model in self.models:
            started = time.perf_counter()
            try:
                text = await self.backend.generate_content(model, prompt, json_output=json_output)
            except Exception as exc:
                logger.warning("Model %s failed, trying next: %s", model, exc)
                attempts.append(ModelAttempt(model=model, error=str(exc) or type(exc).__name__))
                continue

            if not text or not text.strip():
                logger.warning("Model %s returned an empty response, trying next", model)
                attempts.append(ModelAttempt(model=model, error=EMPTY_RESPONSE))
                continue

            logger.info("Model %s answered in %.2fs", model, time.perf_counter() - started)
            return GenerationSuccess(text=text, model_used=model)

        return GenerationFailure(attempts=attempts)

    async def generate(self, prompt: str, *, json_output: bool = False) -> GenerationSuccess:
        """Return the first successful generation.

        Raises:
            AllModelsFailedError: every model failed; carries the attempt log.
        """
        result = await self.attempt(prompt, json_output=json_output)
        if isinstance(result, GenerationFailure):
            raise AllModelsFailedError(result.attempts)
        return result
