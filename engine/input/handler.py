"""
Input handler with action-based abstraction.

Translates raw pygame keyboard, mouse and gamepad events into semantic
Actions and performs edge detection, so a held key reports
"just pressed" on exactly one frame.

Usage:
    for event in pygame.event.get():
        input.process_event(event)
    input.update()

    if input.is_action_just_pressed(Action.ADVANCE):
        engine.advance()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import pygame

from engine.core.actions import (
    Action,
    DEFAULT_KEY_BINDINGS,
    DEFAULT_MOUSE_BINDINGS,
    DEFAULT_GAMEPAD_BINDINGS,
)
from engine.core.events import EventBus


class InputEvent(Enum):
    """Input-specific events."""
    ACTION_PRESSED = "input.action_pressed"
    ACTION_RELEASED = "input.action_released"


@dataclass
class InputState:
    """Complete input state for current frame."""
    actions_pressed: set[Action] = field(default_factory=set)
    actions_just_pressed: set[Action] = field(default_factory=set)
    actions_just_released: set[Action] = field(default_factory=set)

    keys_pressed: set[int] = field(default_factory=set)
    mouse_buttons_pressed: set[int] = field(default_factory=set)
    gamepad_buttons_pressed: set[int] = field(default_factory=set)


class InputHandler:
    """
    Handles all input processing.

    An action stays pressed while any of its bound keys, mouse buttons
    or gamepad buttons is held.
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus

        self._state = InputState()
        self._prev_actions: set[Action] = set()

        # Transitions seen since the last update(); a press and release
        # inside one frame still counts as a press
        self._pressed_this_frame: set[Action] = set()
        self._released_this_frame: set[Action] = set()

        # Bindings (action -> list of codes)
        self._key_bindings = {a: list(k) for a, k in DEFAULT_KEY_BINDINGS.items()}
        self._mouse_bindings = {a: list(b) for a, b in DEFAULT_MOUSE_BINDINGS.items()}
        self._gamepad_bindings = {a: list(b) for a, b in DEFAULT_GAMEPAD_BINDINGS.items()}

        # Gamepad
        self._gamepads: dict[int, pygame.joystick.JoystickType] = {}
        pygame.joystick.init()
        self._refresh_gamepads()

    def _refresh_gamepads(self) -> None:
        """Refresh connected gamepads."""
        self._gamepads.clear()
        for i in range(pygame.joystick.get_count()):
            joy = pygame.joystick.Joystick(i)
            joy.init()
            self._gamepads[joy.get_instance_id()] = joy

    # Public API

    def is_action_pressed(self, action: Action) -> bool:
        """Check if an action is currently held down."""
        return action in self._state.actions_pressed

    def is_action_just_pressed(self, action: Action) -> bool:
        """Check if an action was pressed since the previous frame."""
        return action in self._state.actions_just_pressed

    def is_action_just_released(self, action: Action) -> bool:
        """Check if an action was released since the previous frame."""
        return action in self._state.actions_just_released

    # Key binding management

    def bind_key(self, action: Action, key: int) -> None:
        """Add a key binding for an action."""
        keys = self._key_bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)

    def unbind_key(self, action: Action, key: int) -> None:
        """Remove a key binding for an action."""
        if key in self._key_bindings.get(action, []):
            self._key_bindings[action].remove(key)

    def get_bindings(self, action: Action) -> list[int]:
        """Get all key bindings for an action."""
        return self._key_bindings.get(action, []).copy()

    # Frame update

    def process_event(self, event: pygame.event.Event) -> None:
        """Process a pygame event."""
        if event.type == pygame.KEYDOWN:
            self._state.keys_pressed.add(event.key)
        elif event.type == pygame.KEYUP:
            self._state.keys_pressed.discard(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self._state.mouse_buttons_pressed.add(event.button)
        elif event.type == pygame.MOUSEBUTTONUP:
            self._state.mouse_buttons_pressed.discard(event.button)
        elif event.type == pygame.JOYBUTTONDOWN:
            self._state.gamepad_buttons_pressed.add(event.button)
        elif event.type == pygame.JOYBUTTONUP:
            self._state.gamepad_buttons_pressed.discard(event.button)
        elif event.type in (pygame.JOYDEVICEADDED, pygame.JOYDEVICEREMOVED):
            self._refresh_gamepads()
            return
        else:
            return

        before = self._state.actions_pressed
        self._resolve_actions()
        after = self._state.actions_pressed
        self._pressed_this_frame |= after - before
        self._released_this_frame |= before - after

    def update(self) -> None:
        """
        Update input state for new frame.

        Call this once per frame, after processing the frame's events.
        """
        state = self._state
        state.actions_just_pressed = (state.actions_pressed - self._prev_actions) | self._pressed_this_frame
        state.actions_just_released = (self._prev_actions - state.actions_pressed) | self._released_this_frame
        self._pressed_this_frame = set()
        self._released_this_frame = set()

        if self.event_bus:
            for action in self._state.actions_just_pressed:
                self.event_bus.publish(InputEvent.ACTION_PRESSED, action=action)
            for action in self._state.actions_just_released:
                self.event_bus.publish(InputEvent.ACTION_RELEASED, action=action)

        self._prev_actions = self._state.actions_pressed.copy()

    def _resolve_actions(self) -> None:
        """Rebuild the pressed action set from raw pressed inputs."""
        state = self._state
        pressed: set[Action] = set()

        for bindings, held in (
            (self._key_bindings, state.keys_pressed),
            (self._mouse_bindings, state.mouse_buttons_pressed),
            (self._gamepad_bindings, state.gamepad_buttons_pressed),
        ):
            for action, codes in bindings.items():
                if any(code in held for code in codes):
                    pressed.add(action)

        state.actions_pressed = pressed
