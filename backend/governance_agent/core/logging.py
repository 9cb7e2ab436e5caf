"""Structured logging for requests and workflow operations."""
import logging
from typing import Any, Optional

import structlog

from governance_agent.core.errors import BaseServiceError, ErrorCategory

_LEVEL_BY_CATEGORY = {
    ErrorCategory.TRANSIENT: logging.WARNING,
    ErrorCategory.PERMANENT: logging.ERROR,
    ErrorCategory.DEGRADED: logging.INFO,
}


def configure_logging(settings: Any) -> None:
    """
    Configure structlog once per process.

    Values bound with ``structlog.contextvars`` (the request id from the
    middleware, the workflow operation from the controller) are merged into
    every event, so ledger and advisor logs can be traced back to the call
    that caused them.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if not settings.debug else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    """Get a structured logger."""
    return structlog.get_logger(name)


def workflow_context(operation: str, **context: Any):
    """Bind the running workflow operation (and its proposal/vote) to every log event."""
    return structlog.contextvars.bound_contextvars(workflow_operation=operation, **context)


def log_error(
    logger: structlog.BoundLogger,
    error: BaseServiceError,
    additional_context: Optional[dict[str, Any]] = None,
) -> None:
    """
    Log a collaborator failure at the level its category calls for.

    transient -> warning, permanent -> error, degraded -> info. When the
    error wraps another exception, a second ``error_original_exception``
    event names it.

    Args:
        logger: Structured logger
        error: Failure recorded by the workflow
        additional_context: Extra fields merged into the event
    """
    error_dict = error.to_dict()
    if additional_context:
        error_dict.update(additional_context)

    logger.log(
        _LEVEL_BY_CATEGORY.get(error.category, logging.ERROR),
        f"error_{error.category.value}",
        **error_dict,
    )

    if error.original_error:
        logger.error(
            "error_original_exception",
            original_type=type(error.original_error).__name__,
            original_message=str(error.original_error),
            **error_dict,
        )
