"""Reader session: keeps the latest simplification and its playback in step."""

from __future__ import annotations

import logging

from decipher.audio.player import AudioOutput, PlaybackController
from decipher.audio.synthesis import HttpSpeechSynthesizer
from decipher.config import settings
from decipher.reading_config import ReadingLevel
from decipher.simplification.models import ConfidenceBand, Segment, SimplificationResult
from decipher.simplification.service import SimplificationService, get_simplification_service
from decipher.text.segmenter import segment_sentences, segments_from_sentences

logger = logging.getLogger(__name__)


class ReaderSession:
    """State for one reader: current segments, summary and playback.

    Requests are tagged with a generation number. A response that arrives
    after a newer request was started is discarded, so a slow stale answer
    never overwrites fresher state.
    """

    def __init__(self, service: SimplificationService, controller: PlaybackController) -> None:
        self.service = service
        self.controller = controller
        self.summary = ""
        self.model_used: str | None = None
        self._generation = 0

    @property
    def segments(self) -> list[Segment]:
        return self.controller.segments

    async def refine(
        self, text: str, level: str | ReadingLevel | None = ReadingLevel.MODERATE
    ) -> SimplificationResult | None:
        """Simplify *text* and load the result for playback.

        Returns:
            The result, or None if a newer request superseded this one.
        """
        self._generation += 1
        generation = self._generation

        result = await self.service.simplify(text, level)
        if generation != self._generation:
            logger.info("Dropping stale simplification (generation %d < %d)", generation, self._generation)
            return None

        self.summary = result.summary
        self.model_used = result.model_used
        await self.controller.load(result.segments)
        return result

    async def read_plain(self, text: str) -> list[Segment]:
        """Load *text* as-is, one segment per sentence, without any model call."""
        self._generation += 1
        segments = segments_from_sentences(segment_sentences(text))
        self.summary = ""
        self.model_used = None
        await self.controller.load(segments)
        return segments

    def confidence_bands(self) -> list[ConfidenceBand]:
        return [s.band for s in self.segments]

    async def close(self) -> None:
        """Stop playback and close the speech client; late responses are dropped."""
        self._generation += 1
        await self.controller.close()


def create_session(output: AudioOutput) -> ReaderSession:
    """Build a session wired to the configured models and TTS service."""
    controller = PlaybackController(
        synthesizer=HttpSpeechSynthesizer(settings.tts_url, timeout=settings.tts_timeout_seconds),
        output=output,
        voice=settings.default_voice,
        speed=settings.default_speed,
    )
    return ReaderSession(get_simplification_service(), controller)
