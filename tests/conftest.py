import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure engine modules can be imported
sys.path.append(os.getcwd())


@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window or mixer creation.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.mixer'), \
         patch('pygame.image'), \
         patch('pygame.joystick'), \
         patch('pygame.key'), \
         patch('pygame.mouse'), \
         patch('pygame.Surface'):

        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)
        pygame.joystick.get_count.return_value = 0

        yield


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from engine.core.events import EventBus
    return EventBus()


@pytest.fixture
def scheduler():
    """Fresh Scheduler for each test."""
    from engine.core.timers import Scheduler
    return Scheduler()


class RecordingPresenter:
    """
    Presenter double that records every command and mirrors the
    resulting state, so tests can assert on both.
    """

    def __init__(self):
        from novel.components.dialogue import Side, Visibility
        self.commands: list[tuple] = []
        self.portraits = {side: None for side in Side}
        self.visibility = {side: Visibility.TRANSPARENT for side in Side}
        self.text = ""
        self.visible_count = 0
        self.background = (None, None)
        self.rendered = 0

    def set_slot_portrait(self, side, portrait):
        self.commands.append(("portrait", side, portrait))
        self.portraits[side] = portrait

    def set_slot_visibility(self, side, visibility):
        self.commands.append(("visibility", side, visibility))
        self.visibility[side] = visibility

    def set_displayed_text(self, text, visible_count):
        self.commands.append(("text", text, visible_count))
        self.text = text
        self.visible_count = visible_count

    def set_background(self, image, color=None):
        self.commands.append(("background", image, color))
        self.background = (image, color)

    def play_audio(self, channel, sample):
        self.commands.append(("play", channel, sample))

    def stop_audio(self, channel):
        self.commands.append(("stop", channel))

    def render(self, surface):
        self.rendered += 1

    def played(self, channel=None):
        """Samples played, optionally on one channel."""
        return [c[2] for c in self.commands
                if c[0] == "play" and (channel is None or c[1] == channel)]

    def clear(self):
        self.commands.clear()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def mira():
    from novel.components.character import CharacterPack
    return CharacterPack(
        id="mira",
        emotion_options=("neutral", "happy", "sad"),
        expression_map={"neutral": "mira_neutral.png", "happy": "mira_happy.png"},
        default_voice_sample="mira_blip.wav",
    )


@pytest.fixture
def oren():
    from novel.components.character import CharacterPack
    return CharacterPack(
        id="oren",
        emotion_options=("neutral",),
        expression_map={"neutral": "oren_neutral.png"},
    )


@pytest.fixture
def engine(presenter, scheduler, event_bus):
    from novel.dialogue.engine import DialoguePlaybackEngine
    return DialoguePlaybackEngine(presenter, scheduler, event_bus)


@pytest.fixture
def schemas_dir():
    """Schemas shipped with the demo data."""
    from pathlib import Path
    return Path(__file__).parent.parent / "demos" / "data" / "schemas"
