"""
quantedge_agents.llm.client

Purpose:
    Analysis provider interface, runtime configuration and provider registry.

Design Goals:
    - One stable interface (AnalysisProvider Protocol) used by the orchestrator, CLI and API.
    - Extensible provider registry to avoid scattered provider conditionals.
    - Centralized env configuration; the credential is passed into the provider
      constructor instead of being read as ambient global state.

Providers:
    - Gemini (remote, web-search grounded) via separate module that self-registers
    - Mock (deterministic canned results) via separate module that self-registers
    - Stub (always fails; nothing configured)

Created:
    2026-03-02
"""

from __future__ import annotations

import importlib
import os
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Protocol, Sequence

from quantedge_agents.contracts.analysis import AnalysisResult
from quantedge_agents.llm.providers import LLMProvider
from quantedge_agents.utils.logging import get_logger

logger = get_logger(__name__)

# ----------------------------
# Environment variable constants
# ----------------------------
ENV_API_KEY = "API_KEY"
ENV_GEMINI_API_KEY = "GEMINI_API_KEY"

ENV_LLM_PROVIDER = "LLM_PROVIDER"
ENV_LLM_MODEL_IDENTIFIER = "LLM_MODEL_IDENTIFIER"
ENV_LLM_TIMEOUT_SECONDS = "LLM_TIMEOUT_SECONDS"
ENV_LLM_TRACE_ENABLED = "LLM_TRACE_ENABLED"
ENV_LLM_TEMPERATURE = "LLM_TEMPERATURE"

# ----------------------------
# Non-secret defaults (centralized)
# ----------------------------
DEFAULT_PROVIDER = LLMProvider.GEMINI
DEFAULT_MODEL_IDENTIFIER = "gemini-3-pro-preview"

TRACE_ENABLED_VALUE = "1"

LLM_DEBUG_MARKER = "[AnalysisProvider]"


class AnalysisProvider(Protocol):
    async def analyze(self, tickers: Sequence[str]) -> List[AnalysisResult]: ...


def _optional_float(raw: str | None, *, name: str) -> float | None:
    s = (raw or "").strip()
    if not s:
        return None
    try:
        return float(s)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {s!r}") from e


@dataclass(frozen=True)
class LLMRuntimeConfig:
    """
    Runtime configuration for provider selection and invocation.

    Notes:
        - api_key may be empty; the remote service rejects it, nothing is validated locally.
        - timeout_seconds=None means no local timeout on the remote call.
    """

    provider: LLMProvider = DEFAULT_PROVIDER
    model_identifier: str = DEFAULT_MODEL_IDENTIFIER
    api_key: str = ""

    timeout_seconds: float | None = None
    trace_enabled: bool = False
    temperature: float | None = None

    @staticmethod
    def from_env() -> "LLMRuntimeConfig":
        provider_raw = (os.getenv(ENV_LLM_PROVIDER) or "").strip().lower()
        if provider_raw:
            try:
                provider = LLMProvider(provider_raw)
            except ValueError as e:
                raise ValueError(f"Unsupported {ENV_LLM_PROVIDER} value: {provider_raw}") from e
        else:
            provider = DEFAULT_PROVIDER

        model_identifier = (os.getenv(ENV_LLM_MODEL_IDENTIFIER) or "").strip() or DEFAULT_MODEL_IDENTIFIER

        api_key = (os.getenv(ENV_API_KEY) or os.getenv(ENV_GEMINI_API_KEY) or "").strip()

        return LLMRuntimeConfig(
            provider=provider,
            model_identifier=model_identifier,
            api_key=api_key,
            timeout_seconds=_optional_float(os.getenv(ENV_LLM_TIMEOUT_SECONDS), name=ENV_LLM_TIMEOUT_SECONDS),
            trace_enabled=(os.getenv(ENV_LLM_TRACE_ENABLED) or "").strip() == TRACE_ENABLED_VALUE,
            temperature=_optional_float(os.getenv(ENV_LLM_TEMPERATURE), name=ENV_LLM_TEMPERATURE),
        )

    def with_overrides(
        self,
        *,
        provider: LLMProvider | str | None = None,
        model_identifier: str | None = None,
        trace_enabled: bool | None = None,
    ) -> "LLMRuntimeConfig":
        cfg = self
        if provider is not None:
            cfg = replace(cfg, provider=LLMProvider(str(getattr(provider, "value", provider)).strip().lower()))
        if model_identifier:
            cfg = replace(cfg, model_identifier=model_identifier.strip())
        if trace_enabled is not None:
            cfg = replace(cfg, trace_enabled=trace_enabled)
        return cfg


ProviderBuilder = Callable[[LLMRuntimeConfig], AnalysisProvider]
_PROVIDER_REGISTRY: Dict[LLMProvider, ProviderBuilder] = {}

_PROVIDER_MODULES: Dict[LLMProvider, str] = {
    # Providers that self-register on import:
    LLMProvider.GEMINI: "quantedge_agents.llm.gemini_client",
    LLMProvider.MOCK: "quantedge_agents.llm.mock_client",
}


def register_analysis_provider(provider: LLMProvider, builder: ProviderBuilder) -> None:
    """
    Register a provider builder. Providers should register themselves on import.
    """
    _PROVIDER_REGISTRY[provider] = builder


def _ensure_provider_registered(provider: LLMProvider) -> None:
    if provider in _PROVIDER_REGISTRY:
        return

    module_path = _PROVIDER_MODULES.get(provider)
    if not module_path:
        return

    importlib.import_module(module_path)


@dataclass
class LocalStubProvider:
    """
    A safe fallback that never calls a model.
    """

    async def analyze(self, tickers: Sequence[str]) -> List[AnalysisResult]:
        raise RuntimeError("LocalStubProvider: no analysis provider configured")


def build_analysis_provider_from_config(runtime_config: LLMRuntimeConfig) -> AnalysisProvider:
    """
    Construct an analysis provider from a runtime config via the provider registry.
    """
    if runtime_config.provider == LLMProvider.STUB:
        return LocalStubProvider()

    _ensure_provider_registered(runtime_config.provider)

    builder = _PROVIDER_REGISTRY.get(runtime_config.provider)
    if not builder:
        raise ValueError(f"No provider registered for provider={runtime_config.provider.value}")

    if runtime_config.trace_enabled:
        logger.debug(
            "%s provider=%s model=%s timeout_s=%s",
            LLM_DEBUG_MARKER,
            runtime_config.provider.value,
            runtime_config.model_identifier,
            runtime_config.timeout_seconds,
        )

    return builder(runtime_config)


def build_analysis_provider_from_env() -> AnalysisProvider:
    return build_analysis_provider_from_config(LLMRuntimeConfig.from_env())
