"""
Dialogue presenters - the rendering/audio side of the playback engine.

The engine only issues commands (set a portrait, set a visibility, play
a clip) and assumes they take effect immediately. DialoguePresenter is
that command set; PygameDialoguePresenter carries it out with pygame
and the AudioManager.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import pygame

from novel.components.dialogue import AudioChannel, Side, SlotState, Visibility
from novel.dialogue.config import DialogueConfig

if TYPE_CHECKING:
    from engine.audio.manager import AudioManager


class DialoguePresenter(ABC):
    """Commands the playback engine sends to whatever displays the scene."""

    @abstractmethod
    def set_slot_portrait(self, side: Side, portrait: Optional[str]) -> None: ...

    @abstractmethod
    def set_slot_visibility(self, side: Side, visibility: Visibility) -> None: ...

    @abstractmethod
    def set_displayed_text(self, text: str, visible_count: int) -> None: ...

    @abstractmethod
    def set_background(
        self,
        image: Optional[str],
        color: Optional[tuple[int, int, int, int]] = None,
    ) -> None: ...

    @abstractmethod
    def play_audio(self, channel: AudioChannel, sample: str) -> None: ...

    @abstractmethod
    def stop_audio(self, channel: AudioChannel) -> None: ...

    def render(self, surface: pygame.Surface) -> None:
        """Draw the current state. Presenters that draw elsewhere ignore this."""


def wrap_text(text: str, font: pygame.font.Font, max_width: int) -> list[str]:
    """Greedy word wrap using the font's metrics."""
    lines: list[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split(" "):
            candidate = f"{current} {word}" if current else word
            if current and font.size(candidate)[0] > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    return lines


class PygameDialoguePresenter(DialoguePresenter):
    """
    Draws two speaker slots, a background and a text box with pygame.

    Portraits and backgrounds are asset references resolved against
    asset_path and cached. A missing image never raises: the slot falls
    back to a placeholder box.
    """

    def __init__(
        self,
        audio_manager: AudioManager,
        asset_path: str = "assets",
        config: Optional[DialogueConfig] = None,
    ):
        self.audio = audio_manager
        self.asset_path = asset_path
        self.config = config or DialogueConfig()
        self.logger = logging.getLogger(__name__)

        # Last commanded state
        self.slots: dict[Side, SlotState] = {side: SlotState() for side in Side}
        self.text: str = ""
        self.visible_count: int = 0
        self.background_image: Optional[str] = None
        self.background_color: Optional[tuple[int, int, int, int]] = None

        self._image_cache: dict[str, Optional[pygame.Surface]] = {}
        self._font: Optional[pygame.font.Font] = None

        # Visual settings
        self.box_height = 160
        self.box_margin = 20
        self.text_padding = 18
        self.portrait_height = 420
        self.font_size = 30

        # Colors
        self.box_color = (20, 20, 30, 235)
        self.text_color = (255, 255, 255)
        self.grey_tint = (110, 110, 110)
        self.placeholder_color = (90, 90, 120)

    # Commands

    def set_slot_portrait(self, side: Side, portrait: Optional[str]) -> None:
        self.slots[side].portrait = portrait
        if portrait:
            self._load_image(portrait)

    def set_slot_visibility(self, side: Side, visibility: Visibility) -> None:
        self.slots[side].visibility = visibility

    def set_displayed_text(self, text: str, visible_count: int) -> None:
        self.text = text
        self.visible_count = max(0, min(visible_count, len(text)))

    def set_background(
        self,
        image: Optional[str],
        color: Optional[tuple[int, int, int, int]] = None,
    ) -> None:
        self.background_image = image
        self.background_color = color
        if image:
            self._load_image(image)

    def play_audio(self, channel: AudioChannel, sample: str) -> None:
        path = self._resolve_path(sample)
        if channel is AudioChannel.VOICE:
            self.audio.play_voice(path)
        else:
            self.audio.play_bgm(path, loop=self.config.music_loop, fade_ms=self.config.music_fade_ms)

    def stop_audio(self, channel: AudioChannel) -> None:
        if channel is AudioChannel.VOICE:
            self.audio.stop_voice()
        else:
            self.audio.stop_bgm(fade_ms=self.config.music_fade_ms)

    @property
    def displayed_text(self) -> str:
        """The revealed prefix of the current line."""
        return self.text[:self.visible_count]

    # Assets

    def _resolve_path(self, ref: str) -> str:
        if os.path.isabs(ref) or os.path.exists(ref):
            return ref
        return os.path.join(self.asset_path, ref)

    def _load_image(self, ref: str) -> Optional[pygame.Surface]:
        """Load an image by reference, caching misses as None."""
        if ref in self._image_cache:
            return self._image_cache[ref]

        path = self._resolve_path(ref)
        image = None
        if not os.path.exists(path):
            self.logger.warning(f"Image not found: {path}")
        else:
            try:
                image = pygame.image.load(path).convert_alpha()
            except pygame.error as e:
                self.logger.error(f"Failed to load image {path}: {e}")

        self._image_cache[ref] = image
        return image

    # Drawing

    def render(self, surface: pygame.Surface) -> None:
        width, height = surface.get_size()

        self._draw_background(surface, width, height)
        for side in Side:
            self._draw_slot(surface, side, width, height)
        self._draw_text_box(surface, width, height)

    def _draw_background(self, surface: pygame.Surface, width: int, height: int) -> None:
        image = self._load_image(self.background_image) if self.background_image else None
        if image is not None:
            surface.blit(pygame.transform.smoothscale(image, (width, height)), (0, 0))
        elif self.background_color:
            overlay = pygame.Surface((width, height), pygame.SRCALPHA)
            overlay.fill(self.background_color)
            surface.blit(overlay, (0, 0))

    def _draw_slot(self, surface: pygame.Surface, side: Side, width: int, height: int) -> None:
        slot = self.slots[side]
        if slot.visibility is Visibility.TRANSPARENT or not slot.portrait:
            return

        bottom = height - self.box_height - self.box_margin
        image = self._load_image(slot.portrait)

        if image is None:
            portrait = pygame.Surface((self.portrait_height // 2, self.portrait_height))
            portrait.fill(self.placeholder_color)
        else:
            scale = self.portrait_height / max(1, image.get_height())
            size = (int(image.get_width() * scale), self.portrait_height)
            portrait = pygame.transform.smoothscale(image, size)

        if slot.visibility is Visibility.GREYED:
            portrait = portrait.copy()
            portrait.fill(self.grey_tint, special_flags=pygame.BLEND_RGB_MULT)

        if side is Side.LEFT:
            x = self.box_margin
        else:
            x = width - self.box_margin - portrait.get_width()
        surface.blit(portrait, (x, bottom - portrait.get_height()))

    def _draw_text_box(self, surface: pygame.Surface, width: int, height: int) -> None:
        box = pygame.Rect(
            self.box_margin,
            height - self.box_height - self.box_margin,
            width - self.box_margin * 2,
            self.box_height,
        )
        panel = pygame.Surface(box.size, pygame.SRCALPHA)
        panel.fill(self.box_color)
        surface.blit(panel, box.topleft)

        if not self.visible_count:
            return

        if self._font is None:
            self._font = pygame.font.Font(None, self.font_size)

        max_width = box.width - self.text_padding * 2
        y = box.y + self.text_padding
        for line in wrap_text(self.displayed_text, self._font, max_width):
            rendered = self._font.render(line, True, self.text_color)
            surface.blit(rendered, (box.x + self.text_padding, y))
            y += self._font.get_linesize()
