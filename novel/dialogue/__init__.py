"""
Dialogue module - linear visual-novel scene playback.

Provides:
- Line-by-line playback state machine
- Typewriter text reveal
- Voice clips and per-letter blips
- Two-slot speaker staging (speaking, greyed, vanished)
- Loading scenes from validated JSON
"""

from novel.dialogue.config import DialogueConfig, load_config
from novel.dialogue.engine import DialoguePlaybackEngine, EngineState
from novel.dialogue.host import DialogueHost
from novel.dialogue.library import DialogueLibrary
from novel.dialogue.presenter import DialoguePresenter, PygameDialoguePresenter
from novel.dialogue.reveal import TextReveal
from novel.dialogue.voice import CadenceMode, VoiceCadence

__all__ = [
    "DialogueConfig",
    "load_config",
    "DialoguePlaybackEngine",
    "EngineState",
    "DialogueHost",
    "DialogueLibrary",
    "DialoguePresenter",
    "PygameDialoguePresenter",
    "TextReveal",
    "CadenceMode",
    "VoiceCadence",
]
