"""Cosmetic progress ticking and paced reveal of discovery results."""

import asyncio
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from config.settings import settings

logger = logging.getLogger(__name__)


class ProgressTicker:
    """
    Raise a progress percentage on a fixed interval while a real call is outstanding.

    The value carries no meaning beyond display; `stop()` must be called once
    the call resolves, after which the ticker never moves again.
    """

    def __init__(
        self,
        step: int = None,
        ceiling: int = None,
        interval: float = None
    ):
        self.step = step if step is not None else settings.PROGRESS_STEP
        self.ceiling = ceiling if ceiling is not None else settings.PROGRESS_CEILING
        self.interval = interval if interval is not None else settings.PROGRESS_TICK_SECONDS
        self.progress = 0
        self.running = False
        self.task: Optional[asyncio.Task] = None
        self.updates: "asyncio.Queue[int]" = asyncio.Queue()

    async def start(self):
        """Start ticking"""
        if self.running:
            logger.warning("Progress ticker already running")
            return

        self.running = True
        self.task = asyncio.create_task(self._tick_loop())

    async def stop(self, completed: bool = True):
        """Stop ticking; a completed call jumps to 100"""
        self.running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
            self.task = None

        if completed:
            self._set(100)

    async def _tick_loop(self):
        while self.running:
            await asyncio.sleep(self.interval)
            if not self.running:
                break
            self._set(min(self.progress + self.step, self.ceiling))

    def _set(self, value: int):
        if value != self.progress:
            self.progress = value
            self.updates.put_nowait(value)


class ThoughtRevealSchedule:
    """
    A cancellable sequence of timed events.

    Each event is released `interval` seconds after the previous one,
    independent of when the underlying call completed. `cancel()` drops
    every pending event.
    """

    def __init__(self, events: List[Dict[str, Any]], interval: float = None):
        self.events = list(events)
        self.interval = interval if interval is not None else settings.THOUGHT_REVEAL_SECONDS
        self.cancelled = asyncio.Event()
        self.released = 0

    def cancel(self):
        self.cancelled.set()

    async def __aiter__(self) -> AsyncIterator[Dict[str, Any]]:
        for index, event in enumerate(self.events):
            if self.cancelled.is_set():
                return
            if index > 0:
                try:
                    await asyncio.wait_for(self.cancelled.wait(), timeout=self.interval)
                    return
                except asyncio.TimeoutError:
                    pass
            self.released += 1
            yield event


def build_reveal_events(result: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Order discovery output for paced display.

    The first thought comes first, the documents follow it, the remaining
    thoughts come one at a time and the final result closes the sequence.
    """
    thoughts = result.get('thoughts') or []
    events: List[Dict[str, Any]] = []

    if thoughts:
        events.append({'type': 'thought', 'index': 0, 'text': thoughts[0]})
    events.append({'type': 'documents', 'documents': result.get('documents', [])})
    for index, thought in enumerate(thoughts[1:], start=1):
        events.append({'type': 'thought', 'index': index, 'text': thought})
    events.append({'type': 'result', 'result': result})
    return events
