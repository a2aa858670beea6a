"""
Scene music on top of pygame.mixer.music.
"""

from __future__ import annotations

import logging
import pygame


logger = logging.getLogger(__name__)


class MusicPlayer:
    """
    Streams one music track at a time.

    Starting a track replaces whatever was playing, except that asking
    for the track that is already playing leaves it running, so scenes
    sharing a theme do not restart it.
    """

    def __init__(self):
        self._volume: float = 1.0
        self._current_track: str = ""

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = max(0.0, min(1.0, value))
        if pygame.mixer.get_init():
            pygame.mixer.music.set_volume(self._volume)

    @property
    def current_track(self) -> str:
        """Path of the last track started, empty once stopped."""
        return self._current_track

    def play(self, track_path: str, loops: int = -1, fade_ms: int = 0) -> bool:
        """
        Start a track.

        Args:
            track_path: Path to the music file
            loops: Number of repeats (-1 loops forever)
            fade_ms: Fade-in duration in milliseconds

        Returns:
            True if the track is playing afterwards
        """
        if not pygame.mixer.get_init():
            logger.warning("Audio system not initialized, cannot play music.")
            return False

        if track_path == self._current_track and self.is_playing():
            logger.debug(f"Music already playing: {track_path}")
            return True

        try:
            pygame.mixer.music.load(track_path)
            pygame.mixer.music.play(loops=loops, fade_ms=fade_ms)
            pygame.mixer.music.set_volume(self._volume)
        except pygame.error as e:
            logger.error(f"Failed to load music '{track_path}': {e}")
            return False

        self._current_track = track_path
        logger.info(f"Playing music: {track_path}")
        return True

    def stop(self, fade_ms: int = 0) -> None:
        """Stop the current track, fading out if fade_ms > 0."""
        if not pygame.mixer.get_init():
            return

        if fade_ms > 0:
            pygame.mixer.music.fadeout(fade_ms)
        else:
            pygame.mixer.music.stop()
        self._current_track = ""

    def is_playing(self) -> bool:
        return bool(pygame.mixer.get_init() and pygame.mixer.music.get_busy())
