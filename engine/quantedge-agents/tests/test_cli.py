"""
Smoke and regression tests for the CLI.

Purpose:
- Verifies the CLI runs end-to-end on the mock provider without network access.
- Ensures JSON stdout stays clean (diagnostics go to stderr only).
- Confirms exit codes for blank input, bad configuration and analysis failure.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from quantedge_agents.cli.main import main
from quantedge_agents.presentation.dashboard import NOT_AVAILABLE

ENGINE_ROOT = Path(__file__).resolve().parents[1]
CLI = [sys.executable, "-m", "quantedge_agents.cli.main"]

BAD_MARKERS = ["[INFO]", "[DEBUG]", "[AnalysisProvider]", "run_analysis:"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LLM_PROVIDER", "LLM_MODEL_IDENTIFIER", "LLM_TIMEOUT_SECONDS", "LLM_TEMPERATURE"):
        monkeypatch.delenv(name, raising=False)


def run(args):
    env = {**os.environ, "PYTHONPATH": os.pathsep.join([str(ENGINE_ROOT), os.environ.get("PYTHONPATH", "")])}
    return subprocess.run(
        CLI + args,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        check=False,
        env=env,
    )


def test_json_stdout_is_clean_with_trace():
    r = run(["--tickers", "tsla, rivn", "--provider", "mock", "--output", "json", "--trace"])
    assert r.returncode == 0, r.stderr
    for m in BAD_MARKERS:
        assert m not in r.stdout, f"stdout polluted with {m}"
    j = json.loads(r.stdout)
    assert j["tickers"] == ["TSLA", "RIVN"]
    assert "[DEBUG]" in r.stderr or "[INFO]" in r.stderr


def test_json_output_in_process(capsys):
    main(["--tickers", "aapl rivn", "--provider", "mock", "--output", "json", "--quiet"])
    j = json.loads(capsys.readouterr().out)

    assert j["tickers"] == ["AAPL", "RIVN"]
    assert j["results"][0]["companyName"] == "AAPL Mock Inc."
    assert j["results"][1]["quality"]["dcfIntrinsicValue"] == 0
    rivn = j["dashboard"]["stocks"][1]
    assert rivn["dcf"]["intrinsic_value"] == NOT_AVAILABLE
    assert len(j["results"][0]["sources"]) == 2


def test_pretty_output_renders_sections(capsys):
    main(["--tickers", "LCID", "--provider", "mock", "--quiet"])
    out = capsys.readouterr().out
    assert "LCID Mock Corp (LCID)" in out
    assert "Quantitative Matrix" in out
    assert "DCF N/A (Negative/Unpredictable FCF)" in out
    assert "Risk Exposure" in out
    assert "Sources" in out


def test_blank_tickers_exit_2():
    with pytest.raises(SystemExit) as ei:
        main(["--tickers", " , ", "--provider", "mock", "--quiet"])
    assert ei.value.code == 2


def test_bad_provider_env_exit_2(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    with pytest.raises(SystemExit) as ei:
        main(["--tickers", "AAPL", "--quiet"])
    assert ei.value.code == 2


def test_stub_provider_exit_1(capsys):
    with pytest.raises(SystemExit) as ei:
        main(["--tickers", "AAPL", "--provider", "stub", "--quiet"])
    assert ei.value.code == 1
    assert capsys.readouterr().out == ""
