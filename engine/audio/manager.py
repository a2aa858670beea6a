"""
Core Audio Manager.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from engine.audio.music import MusicPlayer
from engine.core.events import EventBus, AudioEvent

# Mixer channel reserved for voice clips and blips
VOICE_CHANNEL_ID = 0


class AudioManager:
    """
    Central audio manager.

    Handles:
    - Scene music via MusicPlayer
    - A reserved voice channel: starting a voice sample always stops
      the previous one
    - Sound caching
    - Volume categories (master, music, voice)
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.music = MusicPlayer()
        self.event_bus = event_bus
        self.logger = logging.getLogger(__name__)

        self._master_volume: float = 1.0
        self._category_volumes: dict[str, float] = {
            "music": 1.0,
            "voice": 1.0,
        }

        self._sound_cache: dict[str, pygame.mixer.Sound] = {}
        self._voice_channel: pygame.mixer.Channel | None = None
        self._initialized: bool = False

    def init(self, frequency: int = 44100, size: int = -16, channels: int = 2, buffer: int = 512) -> None:
        """Initialize the audio system."""
        if self._initialized:
            return

        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=frequency, size=size, channels=channels, buffer=buffer)
            pygame.mixer.set_num_channels(8)
            pygame.mixer.set_reserved(VOICE_CHANNEL_ID + 1)
            self._voice_channel = pygame.mixer.Channel(VOICE_CHANNEL_ID)
            self._initialized = True
            self.logger.info("Audio system initialized.")
        except pygame.error as e:
            self.logger.error(f"Failed to initialize audio system: {e}")

    def quit(self) -> None:
        """Shutdown audio system."""
        pygame.mixer.quit()
        self._voice_channel = None
        self._initialized = False

    # --- Volume Control ---

    def set_master_volume(self, volume: float) -> None:
        """Set master volume (0.0 to 1.0)."""
        self._master_volume = max(0.0, min(1.0, volume))
        self._update_music_volume()

    def set_category_volume(self, category: str, volume: float) -> None:
        """Set volume for a specific category."""
        if category not in self._category_volumes:
            self.logger.warning(f"Unknown volume category: {category}")
            return
        self._category_volumes[category] = max(0.0, min(1.0, volume))
        if category == "music":
            self._update_music_volume()

    def get_volume(self, category: str) -> float:
        """Effective volume for a category (master * category)."""
        return self._master_volume * self._category_volumes.get(category, 1.0)

    def _update_music_volume(self) -> None:
        self.music.volume = self.get_volume("music")

    def get_settings(self) -> dict[str, float]:
        """Get all volume settings as a flat mapping."""
        return {"master": self._master_volume, **self._category_volumes}

    def apply_settings(self, settings: dict[str, float]) -> None:
        """Apply volume settings ({"master": ..., "music": ..., "voice": ...})."""
        for name, volume in settings.items():
            if name == "master":
                self.set_master_volume(volume)
            else:
                self.set_category_volume(name, volume)

    # --- Music ---

    def play_bgm(self, file_path: str, loop: bool = True, fade_ms: int = 1000) -> None:
        """Play background music."""
        loops = -1 if loop else 0
        if self.music.play(file_path, loops=loops, fade_ms=fade_ms) and self.event_bus:
            self.event_bus.publish(AudioEvent.MUSIC_STARTED, file=file_path)

    def stop_bgm(self, fade_ms: int = 1000) -> None:
        """Stop background music. Publishes MUSIC_STOPPED only if a track was playing."""
        track = self.music.current_track
        self.music.stop(fade_ms=fade_ms)
        if track and self.event_bus:
            self.event_bus.publish(AudioEvent.MUSIC_STOPPED, file=track)

    # --- Voice ---

    def _get_sound(self, file_path: str) -> pygame.mixer.Sound | None:
        """Load or retrieve sound from cache."""
        if not self._initialized:
            return None

        if file_path not in self._sound_cache:
            if not Path(file_path).exists():
                self.logger.warning(f"Audio file not found: {file_path}")
                return None
            try:
                self._sound_cache[file_path] = pygame.mixer.Sound(file_path)
            except pygame.error as e:
                self.logger.error(f"Failed to load sound {file_path}: {e}")
                return None

        return self._sound_cache[file_path]

    def play_voice(self, file_path: str, volume: float = 1.0) -> pygame.mixer.Channel | None:
        """
        Play a voice clip or blip on the reserved voice channel.

        Anything already playing on the voice channel is cut off.

        Returns:
            The voice channel, or None if the sample could not be played.
        """
        sound = self._get_sound(file_path)
        if not sound or not self._voice_channel:
            return None

        channel = self._voice_channel
        channel.stop()
        channel.set_volume(self.get_volume("voice") * volume)
        channel.play(sound)

        if self.event_bus:
            self.event_bus.publish(AudioEvent.VOICE_PLAYED, file=file_path)

        return channel

    def stop_voice(self) -> None:
        """Stop whatever is playing on the voice channel."""
        if self._voice_channel:
            self._voice_channel.stop()
