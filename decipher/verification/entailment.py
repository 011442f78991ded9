"""Zero-shot entailment classifier used to score paraphrases."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Protocol

logger = logging.getLogger(__name__)

ENTAILMENT_TEMPLATE = "This means {}."


class EntailmentClassifier(Protocol):
    async def classify(self, premise: str, hypotheses: list[str], template: str) -> list[float]:
        """Return one entailment probability in [0, 1] per hypothesis, in order."""
        ...


class TransformersEntailmentClassifier:
    """HuggingFace zero-shot-classification pipeline, loaded on first use.

    Inference runs in a worker thread so the event loop keeps serving other
    segments and requests.
    """

    def __init__(self, model_name: str = "facebook/bart-large-mnli") -> None:
        self.model_name = model_name
        self._pipeline: Any = None
        self._lock = threading.Lock()

    def _load(self) -> Any:
        with self._lock:
            if self._pipeline is None:
                from transformers import pipeline  # heavy import, deferred until first use

                logger.info("Loading entailment model %s", self.model_name)
                self._pipeline = pipeline("zero-shot-classification", model=self.model_name)
        return self._pipeline

    def _classify_sync(self, premise: str, hypotheses: list[str], template: str) -> list[float]:
        classifier = self._load()
        # multi_label scores each hypothesis as entailment vs contradiction on
        # its own; a single label would otherwise always normalise to 1.0.
        output = classifier(
            premise,
            candidate_labels=hypotheses,
            hypothesis_template=template,
            multi_label=True,
        )
        by_label = dict(zip(output["labels"], output["scores"], strict=True))
        return [float(by_label[h]) for h in hypotheses]

    async def classify(self, premise: str, hypotheses: list[str], template: str) -> list[float]:
        return await asyncio.to_thread(self._classify_sync, premise, hypotheses, template)
