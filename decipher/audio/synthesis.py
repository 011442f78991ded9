"""Text-to-speech synthesis client and the playable clip handle."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

logger = logging.getLogger(__name__)

VOICES: dict[str, str] = {
    "en-US-Journey-F": "Journey (Female)",
    "en-US-Journey-D": "Journey (Male)",
    "en-US-Studio-O": "Studio (Female)",
    "en-US-Studio-M": "Studio (Male)",
}
DEFAULT_VOICE = "en-US-Journey-F"

MIN_SPEED = 0.5
MAX_SPEED = 2.0
DEFAULT_SPEED = 1.0


def validate_speed(speed: float) -> float:
    """Return *speed* if it lies within the supported playback range."""
    if not MIN_SPEED <= speed <= MAX_SPEED:
        raise ValueError(f"Speed must be between {MIN_SPEED} and {MAX_SPEED}, got {speed}")
    return speed


@dataclass(eq=False)
class AudioClip:
    """A playable, releasable audio buffer.

    The clip owns its bytes; once released the buffer is dropped and the
    clip must not be played again.
    """

    data: bytes
    mime_type: str = "audio/mp3"
    released: bool = field(default=False, init=False)

    def release(self) -> None:
        self.data = b""
        self.released = True


class SpeechSynthesizer(Protocol):
    async def synthesize(self, text: str, voice: str, speed: float) -> AudioClip | None:
        """Return a clip for *text*, or None when no audio could be produced."""
        ...

    async def aclose(self) -> None: ...


def decode_chunks(payload: dict[str, Any]) -> bytes:
    """Concatenate the base64 audio chunks of a TTS response.

    Raises:
        ValueError: the response carries no decodable audio.
    """
    chunks = payload.get("base64Chunks") or []
    parts: list[bytes] = []
    for chunk in chunks:
        encoded = chunk.get("base64") if isinstance(chunk, dict) else chunk
        if not encoded:
            continue
        try:
            parts.append(base64.b64decode(encoded, validate=True))
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"Invalid base64 audio chunk: {exc}") from exc
    if not parts:
        raise ValueError("TTS response contained no audio chunks")
    return b"".join(parts)


class HttpSpeechSynthesizer:
    """Fetch audio from the TTS service over HTTP.

    The service answers ``GET <url>?text=&voice=&speed=`` with
    ``{"base64Chunks": [{"base64": "..."}]}``.
    """

    def __init__(self, url: str, timeout: float = 30.0, client: httpx.AsyncClient | None = None) -> None:
        self.url = url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def synthesize(self, text: str, voice: str, speed: float) -> AudioClip | None:
        try:
            r = await self._client.get(
                self.url,
                params={"text": text, "voice": voice, "speed": str(speed)},
            )
            r.raise_for_status()
            return AudioClip(data=decode_chunks(r.json()))
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Speech synthesis failed for %r: %s", text[:50], exc)
            return None

    async def aclose(self) -> None:
        await self._client.aclose()
