"""
quantedge_agents.orchestrator.progress

Purpose:
    Cosmetic progress estimator: a cancellable repeating asyncio task that ramps
    ApplicationState.progress toward a ceiling while a request is outstanding.

Notes:
    - progress = max(progress, min(ceiling, elapsed / ramp_duration * ramp_span))
    - Monotonically non-decreasing, never above the ceiling; only the request outcome
      moves it past the ceiling.
    - start() always cancels a previous task first; stop() cancels and awaits it.
"""

from __future__ import annotations

import asyncio
import time
from contextlib import suppress
from typing import Callable, Optional

from quantedge_agents.orchestrator.state import ApplicationState

DEFAULT_TICK_INTERVAL_S = 0.1
DEFAULT_RAMP_DURATION_S = 10.0
PROGRESS_CEILING = 95.0
RAMP_SPAN = 90.0
INITIAL_PROGRESS = 5.0


class ProgressEstimator:
    def __init__(
        self,
        state: ApplicationState,
        *,
        interval_s: float = DEFAULT_TICK_INTERVAL_S,
        ramp_duration_s: float = DEFAULT_RAMP_DURATION_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval_s <= 0 or ramp_duration_s <= 0:
            raise ValueError("interval_s and ramp_duration_s must be positive")
        self._state = state
        self._interval_s = interval_s
        self._ramp_duration_s = ramp_duration_s
        self._clock = clock
        self._started_at = 0.0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> float:
        state = self._state
        if state.progress >= PROGRESS_CEILING:
            return state.progress
        elapsed = self._clock() - self._started_at
        percent = min(PROGRESS_CEILING, (elapsed / self._ramp_duration_s) * RAMP_SPAN)
        state.progress = max(state.progress, percent)
        return state.progress

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval_s)
            self.tick()

    async def start(self) -> None:
        await self.stop()
        self._started_at = self._clock()
        self._state.progress = max(self._state.progress, INITIAL_PROGRESS)
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task

    async def __aenter__(self) -> "ProgressEstimator":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
