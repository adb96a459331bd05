"""
backend.api.logging.request_context

Purpose:
    Request-scoped context storage using contextvars, plus the logging filter that
    injects the current request_id into every log record.
"""

from __future__ import annotations

import contextvars
import logging

request_id_ctx_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id",
    default=None,
)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx_var.get() or "-"
        return True
