"""
quantedge_agents.orchestrator.session

Purpose:
    Application state orchestrator: owns one ApplicationState, one ProgressEstimator and
    at most one in-flight analysis request.

State machine:
    Idle -> Processing -> Success | Failed -> (next submit, or dismiss_error)

Design Notes:
    - submit() is not re-entrant: while loading, further submits are ignored.
    - Blank input never touches state.
    - Every failure is converted into the single `error` string; nothing propagates.
    - The estimator is stopped before the outcome is written and on teardown, so no timer
      mutates state after the outcome is known.
    - The in-flight provider call itself is never cancelled (the SDK offers no cancel);
      aclose() only detaches from it and returns the state to Idle.
"""

from __future__ import annotations

import asyncio
import time
from contextlib import suppress
from typing import Callable, List, Optional

from quantedge_agents.contracts.analysis import AnalysisResult, parse_tickers
from quantedge_agents.errors import NO_RESULTS_MESSAGE, NoResults, user_facing_message
from quantedge_agents.llm.client import AnalysisProvider
from quantedge_agents.orchestrator.progress import (
    DEFAULT_RAMP_DURATION_S,
    DEFAULT_TICK_INTERVAL_S,
    ProgressEstimator,
)
from quantedge_agents.orchestrator.state import ApplicationState
from quantedge_agents.utils.logging import get_logger, with_ctx

logger = get_logger(__name__)

DEFAULT_COMPLETION_DELAY_S = 0.4


class AnalysisSession:
    def __init__(
        self,
        provider: AnalysisProvider,
        *,
        tick_interval_s: float = DEFAULT_TICK_INTERVAL_S,
        ramp_duration_s: float = DEFAULT_RAMP_DURATION_S,
        completion_delay_s: float = DEFAULT_COMPLETION_DELAY_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._provider = provider
        self._completion_delay_s = completion_delay_s
        self.state = ApplicationState()
        self._estimator = ProgressEstimator(
            self.state,
            interval_s=tick_interval_s,
            ramp_duration_s=ramp_duration_s,
            clock=clock,
        )
        self._task: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        return self.state.loading or (self._task is not None and not self._task.done())

    def snapshot(self) -> ApplicationState:
        return self.state.snapshot()

    async def submit(self, text: str | None) -> bool:
        """
        Run one analysis cycle for the tickers in `text`.

        Returns False when the submit was ignored (blank input or already loading),
        True once the cycle reached a terminal state.
        """
        tickers = parse_tickers(text)
        if not tickers:
            logger.debug("session.submit ignored: blank input")
            return False
        if self.state.loading:
            logger.info("session.submit ignored: request already in flight")
            return False

        self.state.begin()
        await self._run(tickers)
        return True

    async def _run(self, tickers: List[str]) -> None:
        log = with_ctx(logger, {"tickers": ",".join(tickers)})
        await self._estimator.start()
        log.info("session.processing")

        try:
            try:
                results: List[AnalysisResult] = await self._provider.analyze(tickers)
                if not results:
                    raise NoResults(NO_RESULTS_MESSAGE)
            except Exception as e:
                await self._estimator.stop()
                message = user_facing_message(e)
                log.warning("session.failed err=%s msg=%s", type(e).__name__, message)
                self.state.fail(message)
                return

            await self._estimator.stop()
            self.state.progress = 100.0
            await asyncio.sleep(self._completion_delay_s)
            self.state.succeed(results)
            log.info("session.success results=%s", len(results))
        finally:
            await self._estimator.stop()

    def start(self, text: str | None) -> bool:
        """
        Enter Processing now and schedule the cycle on the running loop.
        Same no-op rules as submit(); the caller sees loading=True on return.
        """
        tickers = parse_tickers(text)
        if not tickers or self.busy:
            return False
        self.state.begin()
        self._task = asyncio.get_running_loop().create_task(self._run(tickers))
        return True

    async def wait(self) -> None:
        task = self._task
        if task is not None:
            await task

    def dismiss_error(self) -> None:
        self.state.error = None

    async def aclose(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
        await self._estimator.stop()
        if self.state.loading:
            logger.info("session.closed: in-flight cycle abandoned")
            self.state.abandon()
