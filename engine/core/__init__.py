"""
Core engine module.

Exports:
- Asset, register_asset: Base class for immutable authored data
- Scheduler, TimerHandle: Cooperative dt-driven timers
- EventBus, Event, DialogueEvent, AudioEvent: Event system
- Action: Input actions
"""

from engine.core.asset import Asset, register_asset, get_asset_type
from engine.core.timers import Scheduler, TimerHandle
from engine.core.events import EventBus, Event, DialogueEvent, AudioEvent
from engine.core.actions import Action

__all__ = [
    # Data
    "Asset",
    "register_asset",
    "get_asset_type",
    # Timing
    "Scheduler",
    "TimerHandle",
    # Events
    "EventBus",
    "Event",
    "DialogueEvent",
    "AudioEvent",
    # Input
    "Action",
]
