"""Audio module - scene music and voice playback."""

from engine.audio.manager import AudioManager
from engine.audio.music import MusicPlayer

__all__ = [
    "AudioManager",
    "MusicPlayer",
]
