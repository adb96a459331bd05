"""
quantedge_agents.llm.response

Purpose:
    Turn a raw generate_content response into validated AnalysisResult records.

Design Notes:
    - Works on SDK response objects and on plain dicts (tests feed synthetic payloads).
    - Either every record validates or the whole batch fails; nothing partial is returned.
    - Grounding citations come from candidates[0].grounding_metadata.grounding_chunks[*].web.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Sequence

from pydantic import ValidationError

from quantedge_agents.contracts.analysis import MAX_SOURCES, AnalysisResult, Source
from quantedge_agents.errors import EmptyResponse, MalformedResponse

DEFAULT_SOURCE_TITLE = "Market Source"


def _get(obj: Any, *names: str) -> Any:
    """Attribute-or-key accessor; SDK objects use snake_case, raw JSON may use camelCase."""
    if obj is None:
        return None
    for name in names:
        if isinstance(obj, dict):
            if obj.get(name) is not None:
                return obj[name]
        else:
            value = getattr(obj, name, None)
            if value is not None:
                return value
    return None


def _strip_code_fences(text: str) -> str:
    s = text.strip()
    if not s.startswith("```"):
        return s
    lines = s.split("\n")
    body = lines[1:]
    if body and body[-1].strip().startswith("```"):
        body = body[:-1]
    return "\n".join(body).strip()


def parse_results_payload(text: str | None) -> List[AnalysisResult]:
    """
    Parse the JSON text payload into results.

    Raises:
        EmptyResponse: no text payload.
        MalformedResponse: invalid JSON, missing/non-list `results`, or a record
            that does not match the AnalysisResult contract.
    """
    if text is None or not text.strip():
        raise EmptyResponse("Empty response from AI")

    try:
        parsed = json.loads(_strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"Response is not valid JSON: {e.msg}") from e

    if not isinstance(parsed, dict) or "results" not in parsed:
        raise MalformedResponse("Response JSON has no 'results' array")

    items = parsed["results"]
    if not isinstance(items, list):
        raise MalformedResponse(f"'results' must be an array, got {type(items).__name__}")

    try:
        return [AnalysisResult.model_validate(item) for item in items]
    except ValidationError as e:
        raise MalformedResponse(f"Result failed schema validation: {e.error_count()} error(s)") from e


def _grounding_chunks(response: Any) -> Iterable[Any]:
    candidates = _get(response, "candidates") or []
    if not candidates:
        return []
    metadata = _get(candidates[0], "grounding_metadata", "groundingMetadata")
    return _get(metadata, "grounding_chunks", "groundingChunks") or []


def extract_sources(response: Any, *, limit: int = MAX_SOURCES) -> List[Source]:
    """
    Collect up to `limit` web citations in their original order.
    Missing titles fall back to DEFAULT_SOURCE_TITLE; entries without a URI are dropped.
    """
    sources: List[Source] = []
    for chunk in _grounding_chunks(response):
        web = _get(chunk, "web")
        uri = _get(web, "uri")
        if not isinstance(uri, str) or not uri.strip():
            continue
        title = _get(web, "title")
        if not isinstance(title, str) or not title.strip():
            title = DEFAULT_SOURCE_TITLE
        sources.append(Source(title=title.strip(), uri=uri.strip()))
        if len(sources) >= limit:
            break
    return sources


def attach_sources(results: Sequence[AnalysisResult], sources: Sequence[Source]) -> List[AnalysisResult]:
    shared = list(sources)[:MAX_SOURCES]
    return [r.model_copy(update={"sources": list(shared)}) for r in results]


def results_from_response(response: Any) -> List[AnalysisResult]:
    results = parse_results_payload(_get(response, "text"))
    return attach_sources(results, extract_sources(response))
