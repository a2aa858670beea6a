"""
Dialogue host - connects the playback engine to input, time and the screen.

The host reacts to the engine's scene signals the way a dialogue panel
does: input is accepted and the panel is shown only between
SCENE_STARTED and SCENE_ENDED. A scene that lingers on its last
line stays on screen after it ends until one more advance press
dismisses it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

from engine.core.actions import Action
from engine.core.events import DialogueEvent, Event
from novel.dialogue.engine import DialoguePlaybackEngine

if TYPE_CHECKING:
    import pygame

    from engine.core.timers import Scheduler
    from engine.input.handler import InputHandler
    from novel.components.dialogue import DialogueScene


class DialogueHost:
    """
    Owns the per-frame loop around a DialoguePlaybackEngine.

    Usage:
        host = DialogueHost(engine, input_handler, scheduler)
        host.play(scene)

        # each frame, after input_handler.update()
        host.update(dt)
        host.render(screen)
    """

    def __init__(
        self,
        engine: DialoguePlaybackEngine,
        input_handler: InputHandler,
        scheduler: Scheduler,
    ):
        self.engine = engine
        self.input = input_handler
        self.scheduler = scheduler

        self.input_enabled = False
        self.visible = False
        self.awaiting_dismiss = False

        self._on_scene_end: Optional[Callable[[DialogueScene], None]] = None
        self._on_dismiss: Optional[Callable[[DialogueScene], None]] = None

        bus = engine.event_bus
        bus.subscribe(DialogueEvent.SCENE_STARTED, self._on_scene_started, weak=False)
        bus.subscribe(DialogueEvent.SCENE_ENDED, self._on_scene_ended, weak=False)

    def play(self, scene: DialogueScene) -> None:
        """Start presenting a scene."""
        self.engine.start(scene)

    def on_scene_end(self, callback: Callable[[DialogueScene], None]) -> None:
        """Set callback for when a scene ends."""
        self._on_scene_end = callback

    def on_dismiss(self, callback: Callable[[DialogueScene], None]) -> None:
        """Set callback for when a lingering scene is dismissed."""
        self._on_dismiss = callback

    def _on_scene_started(self, event: Event) -> None:
        self.input_enabled = True
        self.visible = True
        self.awaiting_dismiss = False

    def _on_scene_ended(self, event: Event) -> None:
        scene = event["scene"]
        self.input_enabled = False
        # A lingering scene leaves its final tableau on screen
        self.visible = scene.linger_on_last_line
        self.awaiting_dismiss = scene.linger_on_last_line
        if self._on_scene_end:
            self._on_scene_end(scene)

    def handle_input(self) -> bool:
        """
        Forward an advance press to the engine.

        Returns:
            True if input was consumed
        """
        if self.awaiting_dismiss:
            if self.input.is_action_just_pressed(Action.ADVANCE):
                self._dismiss()
                return True
            return False

        if not self.input_enabled:
            return False

        if self.input.is_action_just_pressed(Action.ADVANCE):
            self.engine.advance()
            return True

        return False

    def update(self, dt: float) -> None:
        """Handle input first, then let reveal timers run."""
        self.handle_input()
        self.scheduler.update(dt)

    def render(self, surface: pygame.Surface) -> None:
        if self.visible:
            self.engine.presenter.render(surface)

    def _dismiss(self) -> None:
        self.awaiting_dismiss = False
        self.visible = False
        if self._on_dismiss:
            self._on_dismiss(self.engine.scene)
