"""Sentence-by-sentence playback with a prefetching audio cache."""

from __future__ import annotations

import asyncio
import logging
from enum import StrEnum
from typing import Protocol

from decipher.audio.cache import AudioCache
from decipher.audio.synthesis import (
    DEFAULT_SPEED,
    DEFAULT_VOICE,
    AudioClip,
    SpeechSynthesizer,
    validate_speed,
)
from decipher.simplification.models import Segment

logger = logging.getLogger(__name__)


class PlaybackState(StrEnum):
    IDLE = "idle"
    BUFFERING = "buffering"
    PLAYING = "playing"
    PAUSED = "paused"
    ENDED = "ended"


class AudioOutput(Protocol):
    """The device or element that actually plays a clip."""

    def start(self, clip: AudioClip) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def stop(self) -> None: ...

    @property
    def finished(self) -> bool: ...


class PlaybackController:
    """Drive playback over the current segment batch.

    The controller owns its :class:`AudioCache`. Loading a new batch or
    changing voice/speed clears the whole cache; results from synthesis
    calls started before such a change are dropped when they arrive.
    """

    def __init__(
        self,
        synthesizer: SpeechSynthesizer,
        output: AudioOutput,
        voice: str = DEFAULT_VOICE,
        speed: float = DEFAULT_SPEED,
    ) -> None:
        self.synthesizer = synthesizer
        self.output = output
        self.voice = voice
        self.speed = validate_speed(speed)
        self.cache = AudioCache()
        self.segments: list[Segment] = []
        self.index = 0
        self.state = PlaybackState.IDLE
        self._current_clip: AudioClip | None = None
        self._play_token = 0
        self._prefetches: set[asyncio.Task[None]] = set()

    @property
    def active(self) -> bool:
        """True while audio is playing or about to play."""
        return self.state in (PlaybackState.PLAYING, PlaybackState.BUFFERING)

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    @property
    def current_segment(self) -> Segment | None:
        if 0 <= self.index < len(self.segments):
            return self.segments[self.index]
        return None

    # -- batch lifecycle ---------------------------------------------------

    async def load(self, segments: list[Segment]) -> None:
        """Replace the segment batch and reset playback to the first sentence."""
        self._supersede()
        self._stop_output()
        self.cache.clear()
        self.segments = list(segments)
        self.index = 0
        self.state = PlaybackState.IDLE
        self._prefetch(0)

    async def close(self) -> None:
        """Cancel outstanding prefetches, release every cached clip and close the synthesizer."""
        for task in list(self._prefetches):
            task.cancel()
        await asyncio.gather(*self._prefetches, return_exceptions=True)
        self._supersede()
        self._stop_output()
        self.cache.clear()
        self.state = PlaybackState.IDLE
        await self.synthesizer.aclose()

    # -- transport ---------------------------------------------------------

    async def play(self, index: int) -> bool:
        """Play sentence *index*, synthesizing it first if it is not cached.

        Returns:
            True if playback started. False means no audio could be produced
            (the caller may retry) or a newer action superseded this one.
        """
        if not 0 <= index < len(self.segments):
            return False

        self._play_token += 1
        token = self._play_token
        self.index = index

        clip = self.cache.get(index)
        if clip is None:
            self._stop_output()
            self.state = PlaybackState.BUFFERING
            generation = self.cache.generation
            synthesized = await self._synthesize(self.segments[index].simplified)
            stored = synthesized is not None and self.cache.put(index, synthesized, generation)
            if token != self._play_token:
                return False
            if synthesized is None or not stored:
                self.state = PlaybackState.IDLE
                return False
            clip = synthesized

        self.output.start(clip)
        self._current_clip = clip
        self.state = PlaybackState.PLAYING
        self._prefetch(index + 1)
        return True

    async def toggle(self) -> None:
        """Pause, resume, or start playback at the cursor."""
        if self.state is PlaybackState.BUFFERING:
            return
        if self.state is PlaybackState.PLAYING:
            self.output.pause()
            self.state = PlaybackState.PAUSED
            return

        clip = self.cache.get(self.index)
        if (
            self.state is PlaybackState.PAUSED
            and clip is not None
            and clip is self._current_clip
            and not self.output.finished
        ):
            self.output.resume()
            self.state = PlaybackState.PLAYING
            return

        await self.play(self.index)

    async def seek(self, index: int) -> None:
        """Move the cursor; keep playing if audio was active. Out-of-range is ignored."""
        if not 0 <= index < len(self.segments):
            return
        was_active = self.active
        if was_active:
            await self.play(index)
            return
        self._supersede()
        self._stop_output()
        self.index = index
        self.state = PlaybackState.IDLE

    def handle_ended(self) -> None:
        """Called by the output when the current clip finishes."""
        if self.state is PlaybackState.PLAYING:
            self.state = PlaybackState.ENDED

    # -- settings ----------------------------------------------------------

    async def set_voice(self, voice: str) -> None:
        if voice == self.voice:
            return
        self.voice = voice
        await self._invalidate()

    async def set_speed(self, speed: float) -> None:
        if speed == self.speed:
            return
        self.speed = validate_speed(speed)
        await self._invalidate()

    async def _invalidate(self) -> None:
        """Drop all audio made with the old settings; resume if we were playing."""
        was_active = self.active
        self._supersede()
        self._stop_output()
        self.cache.clear()
        logger.info("Audio cache cleared (voice=%s, speed=%s)", self.voice, self.speed)
        if was_active:
            await self.play(self.index)
        else:
            self.state = PlaybackState.IDLE

    # -- prefetch ----------------------------------------------------------

    async def wait_for_prefetch(self) -> None:
        """Wait until every outstanding prefetch has finished."""
        while self._prefetches:
            await asyncio.gather(*list(self._prefetches), return_exceptions=True)

    def _prefetch(self, index: int) -> None:
        if not 0 <= index < len(self.segments) or index in self.cache:
            return
        task = asyncio.create_task(
            self._prefetch_one(index, self.segments[index].simplified, self.cache.generation)
        )
        self._prefetches.add(task)
        task.add_done_callback(self._prefetches.discard)

    async def _prefetch_one(self, index: int, text: str, generation: int) -> None:
        try:
            clip = await self.synthesizer.synthesize(text, self.voice, self.speed)
        except Exception:
            logger.exception("Prefetch of sentence %d failed", index)
            return
        if clip is None:
            return
        if index in self.cache:
            # play() got there first; keep the clip that may be playing.
            clip.release()
            return
        self.cache.put(index, clip, generation)

    # -- helpers -----------------------------------------------------------

    async def _synthesize(self, text: str) -> AudioClip | None:
        try:
            return await self.synthesizer.synthesize(text, self.voice, self.speed)
        except Exception:
            logger.exception("Speech synthesis failed")
            return None

    def _supersede(self) -> None:
        """Invalidate any play() call still waiting on synthesis."""
        self._play_token += 1

    def _stop_output(self) -> None:
        if self._current_clip is not None:
            self.output.stop()
            self._current_clip = None
