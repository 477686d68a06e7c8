"""Utility helpers for the issue synchronisation workflow."""
from __future__ import annotations

import logging

import structlog


def configure_logger(level: str = "INFO", fmt: str = "json") -> structlog.BoundLogger:
    """Configure and return a structlog logger instance.

    The configuration is idempotent and safe to call multiple times. JSON
    output is the default; ``fmt="console"`` renders human readable lines for
    local runs.
    """
    if not structlog.is_configured():
        log_level = getattr(logging, level.upper(), logging.INFO)
        logging.basicConfig(level=log_level)
        renderer = structlog.dev.ConsoleRenderer() if fmt.lower() == "console" else structlog.processors.JSONRenderer()
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                renderer,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            cache_logger_on_first_use=True,
        )
    return structlog.get_logger("issue_sync")


__all__ = ["configure_logger"]
