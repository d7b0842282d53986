"""Structured logging setup shared by the storage clients."""

import logging
from typing import Optional

import structlog

from .config import settings


def configure_structured_logging(level: Optional[str] = None, json: Optional[bool] = None) -> None:
    """
    Configure stdlib logging and structlog.

    Context variables bound with ``structlog.contextvars.bind_contextvars``
    (e.g. a request or correlation id) are merged into every event.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    use_json = settings.LOG_JSON if json is None else json
    renderer = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
