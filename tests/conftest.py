"""Shared fakes for the pipeline and playback tests (no network, no models)."""

from __future__ import annotations

import asyncio

import pytest
import transformers
from fastapi.testclient import TestClient

from decipher.api.main import app
from decipher.audio.synthesis import AudioClip
from decipher.simplification.models import Segment

# transformers swaps its sys.modules entry when a lazy export is first
# resolved; resolve ``pipeline`` up front so ``patch("transformers.pipeline")``
# targets the module object the code under test imports from.
transformers.pipeline  # noqa: B018


class FakeBackend:
    """LLM backend returning scripted results per model id.

    A value that is an Exception instance is raised instead of returned.
    """

    def __init__(self, responses: dict[str, object]) -> None:
        self.responses = responses
        self.calls: list[str] = []
        self.prompts: list[str] = []

    async def generate_content(self, model_id: str, prompt: str, *, json_output: bool = False) -> str:
        self.calls.append(model_id)
        self.prompts.append(prompt)
        result = self.responses[model_id]
        if isinstance(result, Exception):
            raise result
        return str(result)


class FakeClassifier:
    """Entailment classifier returning a fixed probability."""

    def __init__(self, score: float = 0.9, error: Exception | None = None) -> None:
        self.score = score
        self.error = error
        self.calls: list[tuple[str, list[str], str]] = []

    async def classify(self, premise: str, hypotheses: list[str], template: str) -> list[float]:
        self.calls.append((premise, hypotheses, template))
        if self.error is not None:
            raise self.error
        return [self.score for _ in hypotheses]


class FakeSynthesizer:
    """Records every synthesis call; texts in ``fail_on`` produce no audio."""

    def __init__(self, fail_on: set[str] | None = None, delay: float = 0.0) -> None:
        self.calls: list[tuple[str, str, float]] = []
        self.fail_on = fail_on or set()
        self.delay = delay
        self.closed = False

    async def synthesize(self, text: str, voice: str, speed: float) -> AudioClip | None:
        self.calls.append((text, voice, speed))
        if self.delay:
            await asyncio.sleep(self.delay)
        if text in self.fail_on:
            return None
        return AudioClip(data=f"{text}|{voice}|{speed}".encode())

    async def aclose(self) -> None:
        self.closed = True

    def texts(self) -> list[str]:
        return [text for text, _, _ in self.calls]


class FakeOutput:
    """Audio output that records transport commands."""

    def __init__(self) -> None:
        self.started: list[AudioClip] = []
        self.paused = 0
        self.resumed = 0
        self.stopped = 0
        self.finished = False

    def start(self, clip: AudioClip) -> None:
        assert not clip.released, "released clips must never be played"
        self.started.append(clip)
        self.finished = False

    def pause(self) -> None:
        self.paused += 1

    def resume(self) -> None:
        self.resumed += 1

    def stop(self) -> None:
        self.stopped += 1


def make_segments(*texts: str) -> list[Segment]:
    return [Segment(original=t, simplified=t, confidence=100) for t in texts]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)
