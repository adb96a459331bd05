"""
quantedge_agents.api.run_analysis

Purpose:
    Programmatic entrypoint to run one batch analysis without the session/progress layer.
    Shared execution path for:
      - CLI (cli/main.py)
      - backend POST /v1/analyze

Design Notes:
    - No stdout printing (callers decide how to present results).
    - Raises the quantedge_agents.errors taxonomy; callers map errors to exit codes / HTTP.
    - An empty results list is a failure (NoResults), never a success.

Created:
    2026-03-04
"""

from __future__ import annotations

from typing import List

from quantedge_agents.contracts.analysis import AnalysisRequest, AnalysisResult
from quantedge_agents.errors import NO_RESULTS_MESSAGE, NoResults
from quantedge_agents.llm.client import (
    AnalysisProvider,
    LLMRuntimeConfig,
    build_analysis_provider_from_config,
)
from quantedge_agents.utils.logging import get_logger

logger = get_logger(__name__)


async def run_analysis(
    *,
    text: str,
    provider: AnalysisProvider | None = None,
    runtime_config: LLMRuntimeConfig | None = None,
) -> List[AnalysisResult]:
    """
    Parse free-text tickers and run one analysis request.

    Args:
        text: Comma/whitespace separated ticker symbols (e.g., "aapl, nvda").
        provider: Explicit provider (tests/backend); built from runtime_config when omitted.
        runtime_config: Used only when provider is None; defaults to LLMRuntimeConfig.from_env().

    Raises:
        InputEmpty: no tickers in text.
        NoResults: provider returned an empty list.
        TransportFailure / EmptyResponse / MalformedResponse: provider failures.
    """
    request = AnalysisRequest.from_text(text)

    if provider is None:
        provider = build_analysis_provider_from_config(runtime_config or LLMRuntimeConfig.from_env())

    logger.info("run_analysis: tickers=%s", request.label())
    results = await provider.analyze(list(request.tickers))
    if not results:
        raise NoResults(NO_RESULTS_MESSAGE)
    return results
