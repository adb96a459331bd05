"""
quantedge_agents.orchestrator.state

Purpose:
    The single mutable ApplicationState record owned by an AnalysisSession.

Notes:
    - After a completed cycle exactly one of `error` / `data` is set.
    - Results are replaced wholesale on success; stale data is never merged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional

from quantedge_agents.contracts.analysis import AnalysisResult


class Step(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"


class Phase(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ApplicationState:
    loading: bool = False
    progress: float = 0.0
    error: Optional[str] = None
    data: Optional[List[AnalysisResult]] = None
    step: Step = Step.IDLE

    @property
    def phase(self) -> Phase:
        if self.loading:
            return Phase.PROCESSING
        if self.error is not None:
            return Phase.FAILED
        if self.data is not None:
            return Phase.SUCCESS
        return Phase.IDLE

    def begin(self) -> None:
        self.loading = True
        self.progress = 0.0
        self.error = None
        self.data = None
        self.step = Step.PROCESSING

    def succeed(self, results: List[AnalysisResult]) -> None:
        self.loading = False
        self.progress = 100.0
        self.error = None
        self.data = list(results)
        self.step = Step.IDLE

    def fail(self, message: str) -> None:
        self.loading = False
        self.progress = 0.0
        self.error = message
        self.data = None
        self.step = Step.IDLE

    def abandon(self) -> None:
        """Drop an unfinished cycle: back to Idle with no outcome recorded."""
        self.loading = False
        self.progress = 0.0
        self.step = Step.IDLE

    def snapshot(self) -> "ApplicationState":
        return replace(self, data=list(self.data) if self.data is not None else None)
