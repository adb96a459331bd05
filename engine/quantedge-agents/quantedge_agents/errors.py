"""
quantedge_agents.errors

Purpose:
    Failure taxonomy for one analysis cycle, plus the mapping to the single
    user-facing error string held by ApplicationState.

Notes:
    - EmptyResponse and MalformedResponse intentionally share one generic message.
    - TransportFailure keeps the upstream message so it can be shown verbatim.
"""

from __future__ import annotations

GENERIC_ENGINE_ERROR = (
    "Financial analysis engine encountered an error. Please verify the tickers."
)
NO_RESULTS_MESSAGE = "No valid data found for the provided tickers"


class AnalysisError(Exception):
    """Base class for every expected analysis failure."""


class InputEmpty(AnalysisError):
    """Blank or whitespace-only input; callers ignore it without issuing a request."""


class TransportFailure(AnalysisError):
    """Network or service-level failure from the remote call."""


class EmptyResponse(AnalysisError):
    """Remote call succeeded but carried no text payload."""


class MalformedResponse(AnalysisError):
    """Payload is not parseable JSON, lacks the results array, or violates the schema."""


class NoResults(AnalysisError):
    """Payload parsed but the results array is empty."""


def user_facing_message(exc: BaseException) -> str:
    if isinstance(exc, (EmptyResponse, MalformedResponse)):
        return GENERIC_ENGINE_ERROR
    if isinstance(exc, NoResults):
        return NO_RESULTS_MESSAGE
    msg = str(exc).strip()
    return msg or GENERIC_ENGINE_ERROR
