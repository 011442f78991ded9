"""Sentence-index -> audio clip cache owned by one playback controller."""

from __future__ import annotations

from decipher.audio.synthesis import AudioClip


class AudioCache:
    """Clips keyed by sentence index, tagged with a generation counter.

    Entries are only ever dropped all at once. Every clear bumps the
    generation, so a synthesis that started before the clear can be
    recognised as stale when it completes.
    """

    def __init__(self) -> None:
        self._clips: dict[int, AudioClip] = {}
        self.generation = 0

    def __len__(self) -> int:
        return len(self._clips)

    def __contains__(self, index: object) -> bool:
        return index in self._clips

    def get(self, index: int) -> AudioClip | None:
        return self._clips.get(index)

    def put(self, index: int, clip: AudioClip, generation: int) -> bool:
        """Store *clip* if *generation* is current; release it otherwise.

        Returns:
            True if the clip was stored.
        """
        if generation != self.generation:
            clip.release()
            return False
        previous = self._clips.get(index)
        if previous is not None and previous is not clip:
            previous.release()
        self._clips[index] = clip
        return True

    def clear(self) -> None:
        """Release every clip and start a new generation."""
        for clip in self._clips.values():
            clip.release()
        self._clips.clear()
        self.generation += 1
