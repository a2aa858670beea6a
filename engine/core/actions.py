"""
Input action definitions.

Actions abstract raw input (keys, buttons) into semantic actions.
Dialogue code only ever asks about Actions, never raw keys. This enables:
- Key rebinding
- Multiple input methods (keyboard, mouse, gamepad)

Usage:
    if input.is_action_just_pressed(Action.ADVANCE):
        engine.advance()
"""

from enum import Enum, auto

import pygame


class Action(Enum):
    """Semantic input actions."""

    ADVANCE = auto()   # Finish the current reveal or move to the next line
    QUIT = auto()


DEFAULT_KEY_BINDINGS: dict[Action, list[int]] = {
    Action.ADVANCE: [pygame.K_RETURN, pygame.K_SPACE, pygame.K_z],
    Action.QUIT: [pygame.K_ESCAPE],
}

# Mouse button bindings (1 = left, 3 = right)
DEFAULT_MOUSE_BINDINGS: dict[Action, list[int]] = {
    Action.ADVANCE: [1],
}

# Gamepad button bindings (SDL controller layout)
DEFAULT_GAMEPAD_BINDINGS: dict[Action, list[int]] = {
    Action.ADVANCE: [0],  # A button
    Action.QUIT: [7],     # Start
}
