"""
Dialogue components - authored scenes and lines, runtime playback state.

Authored data (DialogueLine, StartingPose, DialogueScene) is immutable
and validated by pydantic. Runtime state (SlotState, RevealState,
PlaybackState) is plain mutable dataclasses owned by one engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from pydantic import Field

from engine.core.asset import Asset, register_asset
from novel.components.character import CharacterPack

if TYPE_CHECKING:
    from novel.dialogue.voice import VoiceCadence


# Translucent black shown behind the speakers when a scene has no background
DEFAULT_BACKDROP_COLOR: tuple[int, int, int, int] = (0, 0, 0, 160)

# Characters per second
DEFAULT_REVEAL_RATE = 30.0


class Side(Enum):
    """One of the two on-screen speaker slots."""
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> Side:
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class Visibility(Enum):
    """How a speaker slot is drawn."""
    OPAQUE = auto()       # Speaking
    GREYED = auto()       # Present but silent
    TRANSPARENT = auto()  # Not present


class AudioChannel(Enum):
    """Audio channels the playback engine addresses."""
    VOICE = auto()
    MUSIC = auto()


class RevealStatus(Enum):
    """Typewriter progress for the current line."""
    IDLE = auto()
    REVEALING = auto()
    COMPLETE = auto()


@register_asset
class DialogueLine(Asset):
    """
    A single authored line.

    Attributes:
        speaker: Character pack speaking the line (None: nobody shown)
        emotion: Label into the speaker's expressions
        side: Slot the speaker occupies
        disappear_after: Hide this speaker once a line on the other side follows
        voice_clip: Dedicated clip replacing the speaker's blips for this line
        text: Line content
        reveal_rate: Characters revealed per second
    """
    speaker: Optional[CharacterPack] = None
    emotion: str = ""
    side: Side = Side.LEFT
    disappear_after: bool = False
    voice_clip: Optional[str] = None
    text: str = ""
    reveal_rate: float = Field(default=DEFAULT_REVEAL_RATE, gt=0)

    def resolve_portrait(self) -> Optional[str]:
        """Portrait for this line, None if there is no speaker or no mapping."""
        if self.speaker is None:
            return None
        return self.speaker.resolve_portrait(self.emotion)


@register_asset
class StartingPose(Asset):
    """A character shown in a slot before the first line."""
    character: CharacterPack
    emotion: str = ""

    def resolve_portrait(self) -> Optional[str]:
        return self.character.resolve_portrait(self.emotion)


@dataclass(frozen=True)
class StagingCommand:
    """Initial slot, background and music setup for a scene."""
    left_portrait: Optional[str] = None
    right_portrait: Optional[str] = None
    background_image: Optional[str] = None
    background_color: Optional[tuple[int, int, int, int]] = None
    music: Optional[str] = None

    def portrait_for(self, side: Side) -> Optional[str]:
        return self.left_portrait if side is Side.LEFT else self.right_portrait


@register_asset
class DialogueScene(Asset):
    """
    An ordered, fixed sequence of lines plus scene-level staging.

    Attributes:
        id: Scene identifier
        lines: The lines, in playback order
        background: Background image (None: translucent backdrop)
        background_music: Music started with the scene
        starting_left: Pose shown in the left slot before line 0
        starting_right: Pose shown in the right slot before line 0
        linger_on_last_line: Keep the final speakers on screen after the end
    """
    id: str = ""
    lines: tuple[DialogueLine, ...] = ()
    background: Optional[str] = None
    background_music: Optional[str] = None
    starting_left: Optional[StartingPose] = None
    starting_right: Optional[StartingPose] = None
    linger_on_last_line: bool = False

    def line_at(self, index: int) -> DialogueLine:
        """Get a line by index. Raises IndexError outside [0, length)."""
        if not 0 <= index < len(self.lines):
            raise IndexError(
                f"Line index {index} out of range for scene '{self.id}' "
                f"with {len(self.lines)} lines"
            )
        return self.lines[index]

    def length(self) -> int:
        """Total line count."""
        return len(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def initial_staging_instruction(
        self,
        fallback_color: tuple[int, int, int, int] = DEFAULT_BACKDROP_COLOR,
    ) -> StagingCommand:
        """Slot portraits, background (or backdrop colour) and music for scene start."""
        return StagingCommand(
            left_portrait=self.starting_left.resolve_portrait() if self.starting_left else None,
            right_portrait=self.starting_right.resolve_portrait() if self.starting_right else None,
            background_image=self.background,
            background_color=None if self.background else fallback_color,
            music=self.background_music,
        )


# Runtime state

@dataclass
class SlotState:
    """What one speaker slot currently shows."""
    portrait: Optional[str] = None
    visibility: Visibility = Visibility.TRANSPARENT

    def clear(self) -> None:
        self.portrait = None
        self.visibility = Visibility.TRANSPARENT


@dataclass
class RevealState:
    """Typewriter progress of the current line."""
    status: RevealStatus = RevealStatus.IDLE
    chars_shown: int = 0
    start_time: float = 0.0


@dataclass
class PlaybackState:
    """
    Transient state of one playback session.

    Created by the engine on start(); nothing outside the owning
    engine mutates it.
    """
    current_index: int = 0
    reveal: RevealState = field(default_factory=RevealState)
    left_slot: SlotState = field(default_factory=SlotState)
    right_slot: SlotState = field(default_factory=SlotState)
    cadence: Optional[VoiceCadence] = None

    def slot(self, side: Side) -> SlotState:
        return self.left_slot if side is Side.LEFT else self.right_slot
