"""Simplification pipeline: prompt -> model fallback -> parse -> verify."""

from __future__ import annotations

import logging
from functools import lru_cache

from decipher.config import settings
from decipher.errors import InputError
from decipher.reading_config import ReadingLevel
from decipher.simplification.backends import build_backend
from decipher.simplification.invoker import ModelFallbackInvoker
from decipher.simplification.models import ChatAnswer, SimplificationResult
from decipher.simplification.parsing import parse_simplification
from decipher.simplification.prompts import (
    build_chat_prompt,
    build_simplification_prompt,
    truncate_input,
)
from decipher.verification.entailment import (
    EntailmentClassifier,
    TransformersEntailmentClassifier,
)
from decipher.verification.scorer import verify

logger = logging.getLogger(__name__)

NO_TEXT = "No text provided"


class SimplificationService:
    """Entry point for simplification and document Q&A requests."""

    def __init__(self, invoker: ModelFallbackInvoker, classifier: EntailmentClassifier) -> None:
        self.invoker = invoker
        self.classifier = classifier

    async def simplify(
        self, text: str, level: str | ReadingLevel | None = ReadingLevel.MODERATE
    ) -> SimplificationResult:
        """Rewrite *text* for the given level and score every segment.

        Raises:
            InputError: *text* is empty or blank.
            AllModelsFailedError: no model in the chain produced output.
        """
        if not text or not text.strip():
            raise InputError(NO_TEXT)

        resolved = ReadingLevel.resolve(level)
        prompt = build_simplification_prompt(text, resolved)
        generation = await self.invoker.generate(prompt, json_output=True)

        # Ground quotes against what the model actually saw.
        source = truncate_input(text)
        parsed = parse_simplification(generation.text, source)
        if parsed.payload is None:
            return SimplificationResult(
                segments=[parsed.fallback] if parsed.fallback else [],
                summary=parsed.summary,
                model_used=generation.model_used,
            )

        segments = await verify(source, parsed.payload.rephrased, self.classifier)
        logger.info(
            "Simplified %d chars at %s into %d segments with %s",
            len(source),
            resolved,
            len(segments),
            generation.model_used,
        )
        return SimplificationResult(
            segments=segments,
            summary=parsed.summary,
            model_used=generation.model_used,
        )

    async def ask(self, question: str, context: str) -> ChatAnswer:
        """Answer a question about *context* in plain language.

        Raises:
            InputError: *question* is empty or blank.
            AllModelsFailedError: no model in the chain produced output.
        """
        if not question or not question.strip():
            raise InputError(NO_TEXT)

        generation = await self.invoker.generate(build_chat_prompt(question, context or ""))
        return ChatAnswer(answer=generation.text.strip(), model_used=generation.model_used)


@lru_cache(maxsize=1)
def get_simplification_service() -> SimplificationService:
    """Build the default service from settings.

    Raises:
        MissingCredentialsError: the model chain needs a key that is not set.
    """
    backend = build_backend(
        settings.model_chain,
        gemini_api_key=settings.gemini_api_key,
        anthropic_api_key=settings.anthropic_api_key,
    )
    return SimplificationService(
        invoker=ModelFallbackInvoker(settings.model_chain, backend),
        classifier=TransformersEntailmentClassifier(settings.entailment_model),
    )
