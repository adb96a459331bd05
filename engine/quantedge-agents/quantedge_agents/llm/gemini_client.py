"""
quantedge_agents.llm.gemini_client

Purpose:
    Google Gemini analysis provider (google-genai SDK) with Google Search grounding.

Notes:
    - Self-registers with the provider registry on import (see llm/client.py).
    - Exactly one generate_content call per analyze(); no retries.
    - The blocking SDK call runs in a worker thread so the event loop (progress ticks)
      keeps running while the request is outstanding.
    - SDK/transport errors are re-raised as TransportFailure with the upstream message.

Created:
    2026-03-03
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, List, Sequence

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from quantedge_agents.contracts.analysis import AnalysisResult
from quantedge_agents.contracts.schema import build_batch_schema
from quantedge_agents.errors import InputEmpty, TransportFailure
from quantedge_agents.llm.client import (
    LLM_DEBUG_MARKER,
    LLMRuntimeConfig,
    register_analysis_provider,
)
from quantedge_agents.llm.prompts import build_system_instruction, build_user_content
from quantedge_agents.llm.providers import LLMProvider
from quantedge_agents.llm.response import results_from_response
from quantedge_agents.utils.logging import LogCtx, get_logger, with_ctx

logger = get_logger(__name__)

RESPONSE_MIME_TYPE = "application/json"


@dataclass
class GeminiAnalysisProvider:
    """
    Batch 3-factor analysis through Gemini structured output.

    `client` may be injected (tests); otherwise a genai.Client is built lazily from api_key
    on first use so a missing credential surfaces as a request failure, not at startup.
    """

    api_key: str
    model_name: str
    timeout_s: float | None = None
    temperature: float | None = None
    trace: bool = False
    client: Any = field(default=None, repr=False)

    def _get_client(self) -> Any:
        if self.client is None:
            http_options = None
            if self.timeout_s:
                http_options = types.HttpOptions(timeout=int(self.timeout_s * 1000))
            self.client = genai.Client(api_key=self.api_key, http_options=http_options)
        return self.client

    def build_config(self, tickers: Sequence[str]) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=build_system_instruction(tickers),
            tools=[types.Tool(google_search=types.GoogleSearch())],
            response_mime_type=RESPONSE_MIME_TYPE,
            response_schema=build_batch_schema(),
            temperature=self.temperature,
        )

    def _generate(self, client: Any, tickers: Sequence[str], config: types.GenerateContentConfig) -> Any:
        return client.models.generate_content(
            model=self.model_name,
            contents=build_user_content(tickers),
            config=config,
        )

    async def analyze(self, tickers: Sequence[str]) -> List[AnalysisResult]:
        tickers = list(tickers)
        if not tickers:
            raise InputEmpty("analyze() requires at least one ticker")

        log = with_ctx(
            logger,
            LogCtx(tickers=",".join(tickers), provider=LLMProvider.GEMINI.value, model=self.model_name),
        )
        started = time.perf_counter()
        log.info("gemini.analyze.start")

        config = self.build_config(tickers)

        try:
            client = self._get_client()
        except ValueError as e:
            # genai.Client rejects a missing/blank credential at construction time.
            log.warning("gemini.analyze.client_error err=%s", e)
            raise TransportFailure(str(e)) from e

        try:
            response = await asyncio.to_thread(self._generate, client, tickers, config)
        except (genai_errors.APIError, httpx.HTTPError) as e:
            log.warning("gemini.analyze.transport_error err=%s", type(e).__name__)
            raise TransportFailure(str(e)) from e

        if self.trace:
            log.debug("%s raw_text=%s", LLM_DEBUG_MARKER, (getattr(response, "text", None) or "")[:800])

        results = results_from_response(response)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        log.info(
            "gemini.analyze.done elapsed_ms=%s results=%s sources=%s",
            elapsed_ms,
            len(results),
            len(results[0].sources) if results else 0,
        )
        return results


def _build_gemini_provider(cfg: LLMRuntimeConfig) -> GeminiAnalysisProvider:
    return GeminiAnalysisProvider(
        api_key=cfg.api_key,
        model_name=cfg.model_identifier,
        timeout_s=cfg.timeout_seconds,
        temperature=cfg.temperature,
        trace=cfg.trace_enabled,
    )


register_analysis_provider(LLMProvider.GEMINI, _build_gemini_provider)
