"""LLM backends the fallback invoker can call.

Model ids starting with ``claude-`` go to Anthropic; every other id is
treated as a Gemini model.
"""

from __future__ import annotations

from typing import Protocol

import google.generativeai as genai
from anthropic import AsyncAnthropic
from anthropic.types import TextBlock

from decipher.errors import MissingCredentialsError

ANTHROPIC_PREFIX = "claude-"


class LLMBackend(Protocol):
    async def generate_content(self, model_id: str, prompt: str, *, json_output: bool = False) -> str: ...


def is_anthropic_model(model_id: str) -> bool:
    return model_id.startswith(ANTHROPIC_PREFIX)


class GeminiBackend:
    """Google Gemini via the google-generativeai SDK."""

    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise MissingCredentialsError("GEMINI_API_KEY is not configured")
        genai.configure(api_key=api_key)  # type: ignore[attr-defined]

    async def generate_content(self, model_id: str, prompt: str, *, json_output: bool = False) -> str:
        generation_config: dict[str, str] = {}
        if json_output:
            generation_config["response_mime_type"] = "application/json"
        model = genai.GenerativeModel(model_id, generation_config=generation_config)  # type: ignore[attr-defined]
        response = await model.generate_content_async(prompt)
        return response.text


class AnthropicBackend:
    """Claude via the Anthropic SDK."""

    def __init__(self, api_key: str, max_tokens: int = 4096) -> None:
        if not api_key:
            raise MissingCredentialsError("ANTHROPIC_API_KEY is not configured")
        self._client = AsyncAnthropic(api_key=api_key)
        self._max_tokens = max_tokens

    async def generate_content(self, model_id: str, prompt: str, *, json_output: bool = False) -> str:
        system = "Respond with a single JSON object and nothing else." if json_output else None
        kwargs = {"system": system} if system else {}
        response = await self._client.messages.create(
            model=model_id,
            max_tokens=self._max_tokens,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        # Narrow the union content block; we only send plain text prompts.
        block = response.content[0]
        if not isinstance(block, TextBlock):
            raise ValueError(f"Expected TextBlock from Claude, got {type(block).__name__}")
        return block.text


class RoutingBackend:
    """Dispatch each model id to the provider that serves it."""

    def __init__(
        self,
        gemini: LLMBackend | None = None,
        anthropic: LLMBackend | None = None,
    ) -> None:
        self._gemini = gemini
        self._anthropic = anthropic

    async def generate_content(self, model_id: str, prompt: str, *, json_output: bool = False) -> str:
        backend = self._anthropic if is_anthropic_model(model_id) else self._gemini
        if backend is None:
            raise MissingCredentialsError(f"No backend configured for model {model_id}")
        return await backend.generate_content(model_id, prompt, json_output=json_output)


def build_backend(models: list[str], gemini_api_key: str, anthropic_api_key: str) -> RoutingBackend:
    """Build a backend able to serve every model in *models*.

    Raises:
        MissingCredentialsError: a provider the chain needs has no key.
    """
    needs_anthropic = any(is_anthropic_model(m) for m in models)
    needs_gemini = any(not is_anthropic_model(m) for m in models)
    return RoutingBackend(
        gemini=GeminiBackend(gemini_api_key) if needs_gemini else None,
        anthropic=AnthropicBackend(anthropic_api_key) if needs_anthropic else None,
    )
