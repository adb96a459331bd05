"""
backend.api.logging.logging_config

Purpose:
    Central logging configuration for the backend API.
    Ensures request_id is present in logs (app, engine and uvicorn loggers).
"""

from __future__ import annotations

import logging

from backend.api.logging.request_context import RequestIdFilter

LOG_FORMAT = "%(asctime)s | %(levelname)s | request_id=%(request_id)s | %(name)s | %(message)s"

# Loggers whose handlers we replace so our formatter/filter wins.
_OWNED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "quantedge_agents")


def _make_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    return handler


def _configure_logger(logger_name: str, handler: logging.Handler, level: int) -> None:
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False


def configure_logging(level: int = logging.INFO) -> None:
    handler = _make_handler(level)

    # Root/app logs (don't clear root handlers to avoid surprising other libs)
    root = logging.getLogger()
    root.setLevel(level)
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        root.addHandler(handler)

    for name in _OWNED_LOGGERS:
        _configure_logger(name, handler, level)

    for name in ("httpx", "httpcore", "google_genai"):
        logging.getLogger(name).setLevel(logging.WARNING)
