"""
Voice cadence - decides when revealed characters trigger a voice blip.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional

from novel.components.dialogue import DialogueLine


class CadenceMode(Enum):
    NONE = auto()         # Silent line
    SINGLE_SHOT = auto()  # Dedicated clip played once when the line starts
    BLIP = auto()         # Speaker's blip every `stride` letters


class VoiceCadence:
    """
    Per-line voice state.

    In BLIP mode the first revealed character blips if it is a letter;
    afterwards a blip fires each time `stride` more letters have been
    revealed since the last one. Non-letters neither blip nor count.
    """

    def __init__(self, mode: CadenceMode, sample: Optional[str] = None, stride: int = 2):
        if stride < 1:
            raise ValueError(f"Blip stride must be >= 1, got {stride}")
        self.mode = mode
        self.sample = sample
        self.stride = stride
        self.letters_since_blip = 0
        self.blips = 0
        self._first = True

    @classmethod
    def for_line(cls, line: DialogueLine, stride: int = 2) -> VoiceCadence:
        """Pick the cadence for a line: its own clip, else the speaker's blip, else silence."""
        if line.voice_clip:
            return cls(CadenceMode.SINGLE_SHOT, line.voice_clip, stride)

        blip = line.speaker.resolve_default_voice() if line.speaker else None
        if blip:
            return cls(CadenceMode.BLIP, blip, stride)

        return cls(CadenceMode.NONE, None, stride)

    @property
    def armed(self) -> bool:
        return self.mode is CadenceMode.BLIP

    def disarm(self) -> None:
        """Stop all further blips for this line."""
        if self.mode is CadenceMode.BLIP:
            self.mode = CadenceMode.NONE

    def on_character(self, char: str) -> bool:
        """
        Register a newly revealed character.

        Returns:
            True if a blip should play now
        """
        first, self._first = self._first, False
        if not self.armed or not char.isalpha():
            return False

        if first:
            self.letters_since_blip = 0
            self.blips += 1
            return True

        self.letters_since_blip += 1
        if self.letters_since_blip >= self.stride:
            self.letters_since_blip = 0
            self.blips += 1
            return True

        return False
