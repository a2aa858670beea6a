"""
Typewriter text reveal on top of the cooperative Scheduler.
"""

from __future__ import annotations

from typing import Callable, Optional

from engine.core.timers import Scheduler, TimerHandle
from novel.components.dialogue import RevealState, RevealStatus


class TextReveal:
    """
    Reveals a line one character per 1/rate seconds.

    The first character is visible immediately, so a line of length L
    finishes after L-1 intervals; an empty line completes on start().
    The reveal writes its progress into the RevealState it is given.

    Callbacks:
        on_step(visible_count, char): one more character became visible
        on_complete(skipped): whole text visible; skipped is True when
            skip() cut the reveal short
    """

    def __init__(
        self,
        text: str,
        rate: float,
        scheduler: Scheduler,
        state: Optional[RevealState] = None,
        on_step: Optional[Callable[[int, str], None]] = None,
        on_complete: Optional[Callable[[bool], None]] = None,
    ):
        if rate <= 0:
            raise ValueError(f"Reveal rate must be > 0, got {rate}")

        self.text = text
        self.rate = rate
        self.scheduler = scheduler
        self.state = state if state is not None else RevealState()
        self.on_step = on_step
        self.on_complete = on_complete
        self._handle: Optional[TimerHandle] = None

    @property
    def interval(self) -> float:
        return 1.0 / self.rate

    @property
    def visible_count(self) -> int:
        return self.state.chars_shown

    @property
    def is_revealing(self) -> bool:
        return self.state.status is RevealStatus.REVEALING

    @property
    def is_complete(self) -> bool:
        return self.state.status is RevealStatus.COMPLETE

    def start(self) -> None:
        """Show the first character and schedule the rest."""
        self.state.start_time = self.scheduler.time
        self.state.chars_shown = 0

        if not self.text:
            self._finish(skipped=False)
            return

        self.state.status = RevealStatus.REVEALING
        self._reveal_next()

    def skip(self) -> None:
        """Cancel pending steps and show the whole text at once."""
        if not self.is_revealing:
            return
        self.cancel()
        self.state.chars_shown = len(self.text)
        self._finish(skipped=True)

    def cancel(self) -> None:
        """Stop future steps. Already revealed characters stay visible."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _reveal_next(self) -> None:
        self._handle = None
        self.state.chars_shown += 1
        count = self.state.chars_shown

        if self.on_step:
            self.on_step(count, self.text[count - 1])

        if count >= len(self.text):
            self._finish(skipped=False)
        elif self.is_revealing:
            self._handle = self.scheduler.call_later(self.interval, self._reveal_next)

    def _finish(self, skipped: bool) -> None:
        self.state.status = RevealStatus.COMPLETE
        if self.on_complete:
            self.on_complete(skipped)
