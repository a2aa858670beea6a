"""
Dialogue playback engine - linear scene state machine.

Drives a DialogueScene line by line: speaker slot visibility, timed
typewriter reveal, voice blips, and the advance/interrupt input policy.
Everything it shows or plays goes through a DialoguePresenter.

States:
    IDLE -> PRESENTING(line i, revealing) -> PRESENTING(line i, complete)
         -> PRESENTING(line i+1, ...) -> ... -> ENDED

Usage:
    engine = DialoguePlaybackEngine(presenter, scheduler, event_bus)
    engine.start(scene)

    # Once per distinct press of the advance input
    engine.advance()

    # Once per frame
    scheduler.update(dt)
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Optional

from engine.core.events import EventBus, DialogueEvent
from engine.core.timers import Scheduler
from novel.components.dialogue import (
    AudioChannel,
    DialogueLine,
    DialogueScene,
    PlaybackState,
    RevealStatus,
    Side,
    SlotState,
    StagingCommand,
    Visibility,
)
from novel.dialogue.config import DialogueConfig
from novel.dialogue.presenter import DialoguePresenter
from novel.dialogue.reveal import TextReveal
from novel.dialogue.voice import CadenceMode, VoiceCadence


class EngineState(Enum):
    """Playback session state."""
    IDLE = auto()
    PRESENTING = auto()
    ENDED = auto()


class DialoguePlaybackEngine:
    """
    Plays one DialogueScene at a time.

    Driven by exactly two stimuli: advance() calls and the reveal timers
    it schedules on the Scheduler. Both run on the thread that calls
    advance() and Scheduler.update(), never concurrently.

    After a scene ends its PlaybackState stays readable until the next
    start().
    """

    def __init__(
        self,
        presenter: DialoguePresenter,
        scheduler: Scheduler,
        event_bus: Optional[EventBus] = None,
        config: Optional[DialogueConfig] = None,
    ):
        self.presenter = presenter
        self.scheduler = scheduler
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.config = config or DialogueConfig()
        self.logger = logging.getLogger(__name__)

        self._state = EngineState.IDLE
        self._scene: Optional[DialogueScene] = None
        self._playback: Optional[PlaybackState] = None
        self._reveal: Optional[TextReveal] = None
        # Scene music this engine started and has not stopped
        self._music: Optional[str] = None

    # Inspection

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def is_active(self) -> bool:
        """True while a scene is being presented."""
        return self._state is EngineState.PRESENTING

    @property
    def scene(self) -> Optional[DialogueScene]:
        return self._scene

    @property
    def playback(self) -> Optional[PlaybackState]:
        return self._playback

    @property
    def current_index(self) -> Optional[int]:
        return self._playback.current_index if self._playback else None

    @property
    def current_line(self) -> Optional[DialogueLine]:
        if self._scene is None or self._playback is None:
            return None
        return self._scene.line_at(self._playback.current_index)

    @property
    def reveal_status(self) -> RevealStatus:
        if self._playback is None:
            return RevealStatus.IDLE
        return self._playback.reveal.status

    @property
    def visible_count(self) -> int:
        return self._playback.reveal.chars_shown if self._playback else 0

    def slot(self, side: Side) -> SlotState:
        """Current state of a speaker slot (empty when nothing ever played)."""
        if self._playback is None:
            return SlotState()
        return self._playback.slot(side)

    # Session control

    def start(self, scene: DialogueScene) -> None:
        """
        Begin playing a scene from its first line.

        Raises:
            ValueError: the scene has no lines
            RuntimeError: another scene is still being presented
        """
        if self._state is EngineState.PRESENTING:
            raise RuntimeError(
                f"Cannot start scene '{scene.id}': scene "
                f"'{self._scene.id if self._scene else ''}' is still playing"
            )
        if scene.length() == 0:
            raise ValueError(f"Scene '{scene.id}' has no lines")

        self._scene = scene
        self._playback = PlaybackState()
        self._reveal = None
        self._state = EngineState.PRESENTING

        self._apply_staging(scene.initial_staging_instruction(self.config.backdrop_color))
        self.logger.info(f"Scene '{scene.id}' started ({scene.length()} lines)")
        self.event_bus.publish(DialogueEvent.SCENE_STARTED, scene=scene)

        self._present_line(0)

    def advance(self) -> None:
        """
        Handle one advance input.

        While the current line is still revealing, shows it in full.
        Otherwise moves to the next line, or ends the scene after the
        last one. Ignored while IDLE or ENDED.
        """
        if self._state is not EngineState.PRESENTING:
            self.logger.debug(f"Ignoring advance while {self._state.name}")
            return

        if self._reveal is not None and self._reveal.is_revealing:
            self._playback.cadence.disarm()
            self._reveal.skip()
            return

        next_index = self._playback.current_index + 1
        if next_index >= self._scene.length():
            self._end_scene()
        else:
            self._present_line(next_index)

    # Internals

    def _apply_staging(self, staging: StagingCommand) -> None:
        self.presenter.stop_audio(AudioChannel.VOICE)
        self.presenter.set_background(staging.background_image, staging.background_color)

        for side in Side:
            portrait = staging.portrait_for(side)
            visibility = Visibility.OPAQUE if portrait is not None else Visibility.TRANSPARENT
            self._set_slot(side, portrait, visibility)

        # A track carried over from a chained scene keeps playing if it matches
        if self._music and self._music != staging.music:
            self.presenter.stop_audio(AudioChannel.MUSIC)
        if staging.music:
            self.presenter.play_audio(AudioChannel.MUSIC, staging.music)
        self._music = staging.music

    def _set_slot(self, side: Side, portrait: Optional[str], visibility: Visibility) -> None:
        slot = self._playback.slot(side)
        slot.portrait = portrait
        slot.visibility = visibility
        self.presenter.set_slot_portrait(side, portrait)
        self.presenter.set_slot_visibility(side, visibility)

    def _set_visibility(self, side: Side, visibility: Visibility) -> None:
        self._playback.slot(side).visibility = visibility
        self.presenter.set_slot_visibility(side, visibility)

    def _present_line(self, index: int) -> None:
        scene = self._scene
        playback = self._playback
        line = scene.line_at(index)
        playback.current_index = index

        # Speaking slot: a speaker without a resolvable portrait is not shown
        portrait = line.resolve_portrait()
        self._set_slot(
            line.side,
            portrait,
            Visibility.OPAQUE if portrait is not None else Visibility.TRANSPARENT,
        )

        # Silent slot: vanished speakers stay gone, everyone else is greyed
        silent = line.side.opposite
        previous = scene.line_at(index - 1) if index > 0 else None
        if previous is not None and previous.disappear_after and previous.side is not line.side:
            self._set_visibility(silent, Visibility.TRANSPARENT)
        elif playback.slot(silent).visibility is not Visibility.TRANSPARENT:
            self._set_visibility(silent, Visibility.GREYED)

        # Voice
        self.presenter.stop_audio(AudioChannel.VOICE)
        cadence = VoiceCadence.for_line(line, self.config.blip_stride)
        playback.cadence = cadence
        if cadence.mode is CadenceMode.SINGLE_SHOT:
            self.presenter.play_audio(AudioChannel.VOICE, cadence.sample)

        self.logger.debug(f"Presenting line {index} of '{scene.id}' ({line.side.value})")
        self.event_bus.publish(DialogueEvent.LINE_PRESENTED, index=index, line=line)

        self.presenter.set_displayed_text(line.text, 0)
        self._reveal = TextReveal(
            line.text,
            line.reveal_rate,
            self.scheduler,
            state=playback.reveal,
            on_step=self._on_reveal_step,
            on_complete=self._on_reveal_complete,
        )
        self._reveal.start()

    def _on_reveal_step(self, visible_count: int, char: str) -> None:
        playback = self._playback
        line = self._scene.line_at(playback.current_index)

        self.presenter.set_displayed_text(line.text, visible_count)
        self.event_bus.publish(
            DialogueEvent.TEXT_ADVANCED,
            index=playback.current_index,
            visible_count=visible_count,
        )

        cadence = playback.cadence
        if cadence is not None and cadence.on_character(char):
            self.presenter.play_audio(AudioChannel.VOICE, cadence.sample)
            self.event_bus.publish(
                DialogueEvent.VOICE_BLIP,
                index=playback.current_index,
                sample=cadence.sample,
            )

    def _on_reveal_complete(self, skipped: bool) -> None:
        playback = self._playback
        line = self._scene.line_at(playback.current_index)

        if skipped or not line.text:
            self.presenter.set_displayed_text(line.text, len(line.text))
        self.event_bus.publish(
            DialogueEvent.TEXT_COMPLETED,
            index=playback.current_index,
            skipped=skipped,
        )

    def _end_scene(self) -> None:
        scene = self._scene

        if self._reveal is not None:
            self._reveal.cancel()
            self._reveal = None

        self.presenter.stop_audio(AudioChannel.VOICE)

        if not scene.linger_on_last_line:
            for side in Side:
                self._set_slot(side, None, Visibility.TRANSPARENT)

        self._state = EngineState.ENDED
        self.logger.info(f"Scene '{scene.id}' ended")
        self.event_bus.publish(DialogueEvent.SCENE_ENDED, scene=scene)

        # A SCENE_ENDED handler may have chained the next scene, which
        # decides about the music itself
        if self._state is EngineState.ENDED and self._music:
            self.presenter.stop_audio(AudioChannel.MUSIC)
            self._music = None
