"""
Character packs - portraits per emotion and a default voice blip.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import Field, model_validator

from engine.core.asset import Asset, register_asset


logger = logging.getLogger(__name__)


@register_asset
class CharacterPack(Asset):
    """
    Static lookup from emotion label to portrait, plus a voice blip.

    One pack is shared by every line and scene the character appears in.

    Attributes:
        id: Pack identifier used by authored scenes
        emotion_options: Authoring-time emotion labels, first is the default
        expression_map: Emotion label -> portrait asset reference
        default_voice_sample: Generic blip used when a line has no voice clip
    """
    id: str = ""
    emotion_options: tuple[str, ...] = Field(default=("EMPTY",), min_length=1)
    expression_map: dict[str, str] = Field(default_factory=dict)
    default_voice_sample: Optional[str] = None

    @model_validator(mode="after")
    def _warn_if_empty(self) -> CharacterPack:
        if not self.expression_map:
            logger.warning(
                f"Character pack '{self.id}' has no portrait expressions; "
                "every line it speaks will be hidden."
            )
        return self

    @property
    def default_emotion(self) -> str:
        """Fallback emotion label."""
        return self.emotion_options[0]

    def resolve_portrait(self, emotion: str) -> Optional[str]:
        """Portrait for an emotion, or None when the emotion has no portrait."""
        return self.expression_map.get(emotion)

    def resolve_default_voice(self) -> Optional[str]:
        """The pack's voice blip sample, if any."""
        return self.default_voice_sample
