"""
Visual-novel components.

Authored data is immutable Pydantic models; runtime playback state is
plain dataclasses owned by a single engine.
"""

from novel.components.character import CharacterPack
from novel.components.dialogue import (
    DEFAULT_BACKDROP_COLOR,
    DEFAULT_REVEAL_RATE,
    AudioChannel,
    DialogueLine,
    DialogueScene,
    PlaybackState,
    RevealState,
    RevealStatus,
    Side,
    SlotState,
    StagingCommand,
    StartingPose,
    Visibility,
)

__all__ = [
    "CharacterPack",
    "DEFAULT_BACKDROP_COLOR",
    "DEFAULT_REVEAL_RATE",
    "AudioChannel",
    "DialogueLine",
    "DialogueScene",
    "PlaybackState",
    "RevealState",
    "RevealStatus",
    "Side",
    "SlotState",
    "StagingCommand",
    "StartingPose",
    "Visibility",
]
