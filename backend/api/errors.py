"""
backend.api.errors

Purpose:
    Internal exception types for API error handling.
    Routes raise ApiError; global handler converts to ErrorResponse.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import status

from backend.api.contracts.error_contract import ApiErrorCode
from quantedge_agents.errors import (
    AnalysisError,
    InputEmpty,
    NoResults,
    user_facing_message,
)


@dataclass(eq=False)
class ApiError(Exception):
    status_code: int
    error_code: ApiErrorCode
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


def api_error_from_analysis(exc: Exception) -> ApiError:
    """
    Map an engine failure onto the stable API error contract.
    """
    message = user_facing_message(exc)
    if isinstance(exc, InputEmpty):
        return ApiError(status.HTTP_422_UNPROCESSABLE_ENTITY, ApiErrorCode.BAD_REQUEST, message)
    if isinstance(exc, NoResults):
        return ApiError(status.HTTP_404_NOT_FOUND, ApiErrorCode.NO_RESULTS, message)
    details = {"kind": type(exc).__name__} if isinstance(exc, AnalysisError) else None
    return ApiError(status.HTTP_502_BAD_GATEWAY, ApiErrorCode.ENGINE_ERROR, message, details)
