"""
Dialogue Engine

Reusable infrastructure for the visual-novel layer: events, timers,
authored-data base classes, pygame audio and input.

Quick Start:
    from engine.core import EventBus, Scheduler
    from engine.input import InputHandler

    bus = EventBus()
    scheduler = Scheduler()
    input = InputHandler(bus)
"""

__version__ = "0.1.0"

from engine.core import (
    Asset,
    register_asset,
    Scheduler,
    TimerHandle,
    EventBus,
    Event,
    DialogueEvent,
    AudioEvent,
    Action,
)

from engine.input import InputHandler

__all__ = [
    # Data
    "Asset",
    "register_asset",
    # Timing
    "Scheduler",
    "TimerHandle",
    # Events
    "EventBus",
    "Event",
    "DialogueEvent",
    "AudioEvent",
    # Input
    "InputHandler",
    "Action",
]
