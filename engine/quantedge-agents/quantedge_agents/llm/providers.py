"""
quantedge_agents.llm.providers

Purpose:
    Canonical analysis provider identifiers.
    Used by CLI + API config validation and by provider factory selection.

Created:
    2026-03-02
"""

from __future__ import annotations

from enum import Enum


class LLMProvider(str, Enum):
    STUB = "stub"
    MOCK = "mock"
    GEMINI = "gemini"
