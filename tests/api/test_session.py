"""
tests.api.test_session

Purpose:
    API tests for the single-owner dashboard session (submit, poll, dismiss, dashboard).

Notes:
    - Uses `with TestClient(...)` so the app's event loop (and the background analysis
      task started by submit) lives across requests.
    - Polls /v1/session/state until the cycle leaves "processing".
"""

from __future__ import annotations

import threading
import time
from typing import List, Sequence

from quantedge_agents.contracts.analysis import AnalysisResult
from quantedge_agents.errors import TransportFailure
from quantedge_agents.llm.mock_client import MockAnalysisProvider


class LoopThreadProvider(MockAnalysisProvider):
    """Mock provider that remembers which thread the event loop runs on."""

    loop_thread: int | None = None

    async def analyze(self, tickers: Sequence[str]) -> List[AnalysisResult]:
        self.loop_thread = threading.get_ident()
        return await super().analyze(tickers)


def _wait_for_outcome(client, timeout_s: float = 5.0) -> dict:
    deadline = time.monotonic() + timeout_s
    while True:
        state = client.get("/v1/session/state").json()
        if state["phase"] != "processing" or time.monotonic() > deadline:
            return state
        time.sleep(0.02)


def test_initial_state_is_idle(client) -> None:
    r = client.get("/v1/session/state")
    assert r.status_code == 200
    assert r.json() == {
        "loading": False,
        "progress": 0.0,
        "error": None,
        "data": None,
        "step": "idle",
        "phase": "idle",
    }


def test_blank_submit_is_a_no_op(client) -> None:
    r = client.post("/v1/session/submit", json={"tickers": "  , "})
    assert r.status_code == 200, r.text
    assert r.json()["phase"] == "idle"


def test_submit_then_poll_success(client_factory) -> None:
    with client_factory() as client:
        r = client.post("/v1/session/submit", json={"tickers": "tsla rivn"})
        assert r.status_code == 202, r.text
        assert r.json()["loading"] is True

        state = _wait_for_outcome(client)
        assert state["phase"] == "success"
        assert state["progress"] == 100.0
        assert state["error"] is None
        assert [d["ticker"] for d in state["data"]] == ["TSLA", "RIVN"]
        assert state["data"][1]["quality"]["dcfIntrinsicValue"] == 0

        dash = client.get("/v1/session/dashboard").json()
        assert dash["tabs"] == ["TSLA", "RIVN"]
        assert dash["stocks"][1]["dcf"]["intrinsic_value"] == "N/A"


def test_submit_while_loading_is_409(client_factory) -> None:
    with client_factory(provider=MockAnalysisProvider(latency_s=0.5)) as client:
        assert client.post("/v1/session/submit", json={"tickers": "AAPL"}).status_code == 202

        r = client.post("/v1/session/submit", json={"tickers": "NVDA"})
        assert r.status_code == 409, r.text
        assert r.json()["error_code"] == "SESSION_BUSY"

        state = _wait_for_outcome(client)
        assert [d["ticker"] for d in state["data"]] == ["AAPL"]


def test_failure_then_dismiss(client_factory, failing_provider) -> None:
    with client_factory(provider=failing_provider(TransportFailure("upstream unavailable"))) as client:
        client.post("/v1/session/submit", json={"tickers": "AAPL"})
        state = _wait_for_outcome(client)
        assert state["phase"] == "failed"
        assert state["error"] == "upstream unavailable"
        assert state["data"] is None
        assert state["progress"] == 0.0

        r = client.post("/v1/session/dismiss")
        assert r.status_code == 200
        assert r.json()["error"] is None
        assert r.json()["phase"] == "idle"


def test_dashboard_empty_before_any_result(client) -> None:
    r = client.get("/v1/session/dashboard")
    assert r.status_code == 200
    assert r.json() == {"tabs": [], "stocks": []}


def test_session_routes_touch_state_on_the_event_loop(client_factory) -> None:
    provider = LoopThreadProvider()
    with client_factory(provider=provider) as client:
        session = client.app.state.session
        seen: dict[str, set] = {"snapshot": set(), "dismiss": set()}

        snapshot, dismiss_error = session.snapshot, session.dismiss_error

        def recording_snapshot():
            seen["snapshot"].add(threading.get_ident())
            return snapshot()

        def recording_dismiss():
            seen["dismiss"].add(threading.get_ident())
            dismiss_error()

        session.snapshot = recording_snapshot
        session.dismiss_error = recording_dismiss

        client.post("/v1/session/submit", json={"tickers": "AAPL"})
        assert _wait_for_outcome(client)["phase"] == "success"
        assert client.get("/v1/session/dashboard").status_code == 200
        assert client.post("/v1/session/dismiss").status_code == 200

    assert provider.loop_thread is not None
    assert seen["snapshot"] == {provider.loop_thread}
    assert seen["dismiss"] == {provider.loop_thread}
