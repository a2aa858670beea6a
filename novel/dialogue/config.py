"""
Dialogue playback configuration.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from novel.components.dialogue import DEFAULT_BACKDROP_COLOR


logger = logging.getLogger(__name__)


@dataclass
class DialogueConfig:
    """
    Settings shared by the playback engine and its presenter.

    Attributes:
        blip_stride: Letters between voice blips
        backdrop_color: RGBA drawn when a scene has no background image
        music_loop: Loop scene music
        music_fade_ms: Fade used when scene music starts and stops
        volumes: Volume per audio category ("master", "music", "voice")
    """
    blip_stride: int = 2
    backdrop_color: tuple[int, int, int, int] = DEFAULT_BACKDROP_COLOR
    music_loop: bool = True
    music_fade_ms: int = 1000
    volumes: dict[str, float] = field(default_factory=lambda: {
        "master": 1.0,
        "music": 1.0,
        "voice": 1.0,
    })

    def __post_init__(self):
        if self.blip_stride < 1:
            raise ValueError(f"blip_stride must be >= 1, got {self.blip_stride}")
        if len(self.backdrop_color) != 4:
            raise ValueError(f"backdrop_color must be RGBA, got {self.backdrop_color}")
        self.backdrop_color = tuple(self.backdrop_color)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DialogueConfig:
        """
        Build a config from parsed JSON.

        Expected format (every key optional):
        {
            "blip_stride": 2,
            "backdrop_color": [0, 0, 0, 160],
            "music_loop": true,
            "music_fade_ms": 1000,
            "volumes": {"master": 1.0, "music": 0.8, "voice": 1.0}
        }
        """
        config = cls(
            blip_stride=data.get("blip_stride", 2),
            backdrop_color=tuple(data.get("backdrop_color", DEFAULT_BACKDROP_COLOR)),
            music_loop=data.get("music_loop", True),
            music_fade_ms=data.get("music_fade_ms", 1000),
        )
        config.volumes.update(data.get("volumes", {}))
        return config

    def to_dict(self) -> dict[str, Any]:
        return {
            "blip_stride": self.blip_stride,
            "backdrop_color": list(self.backdrop_color),
            "music_loop": self.music_loop,
            "music_fade_ms": self.music_fade_ms,
            "volumes": dict(self.volumes),
        }


def load_config(path: str | Path) -> DialogueConfig:
    """
    Load a DialogueConfig from a JSON file.

    A missing or unreadable file falls back to defaults. Values that
    parse but are invalid raise ValueError.
    """
    config_file = Path(path)
    if not config_file.exists():
        logger.warning(f"Dialogue config not found: {config_file}, using defaults")
        return DialogueConfig()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading dialogue config {config_file}: {e}")
        return DialogueConfig()

    return DialogueConfig.from_dict(data)
