"""
Structured Logging
==================

JSON logging for the admissions services. structlog loggers used across
admission_core are routed through the stdlib root logger so a single
handler and formatter apply to everything.

Usage:
    from admission_core.logging import setup_logging, log_audit

    setup_logging(service_name="admissions-api")
    log_audit("account.activate", resource_type="user", resource_id=email)
"""

import json
import logging
import sys
import traceback
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog

service_name_var: ContextVar[str] = ContextVar("service_name", default="unknown")


# =============================================================================
# JSON Formatter
# =============================================================================

class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": service_name_var.get(),
        }

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_data, default=str)


def _to_stdlib_kwargs(logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Final structlog processor: event becomes the message, the rest extra_data."""
    event = event_dict.pop("event", "")
    exc_info = event_dict.pop("exc_info", None)
    kwargs: Dict[str, Any] = {"msg": event, "extra": {"extra_data": event_dict}}
    if exc_info:
        kwargs["exc_info"] = exc_info
    return kwargs


# =============================================================================
# Setup
# =============================================================================

def setup_logging(
    service_name: str,
    level: str = "INFO",
    json_output: bool = True,
) -> logging.Logger:
    """
    Configure stdlib and structlog logging for a service.

    Args:
        service_name: Name of the service (e.g., "admissions-api")
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Whether to output JSON (for production)

    Returns:
        Configured root logger
    """
    service_name_var.set(service_name)
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s %(extra_data)s",
            defaults={"extra_data": ""},
        ))
    root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            _to_stdlib_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger.info(f"Logging configured for {service_name}", extra={
        "extra_data": {"event": "logging.configured", "service": service_name}
    })
    return root_logger


# =============================================================================
# Logging Functions
# =============================================================================

def log_audit(
    action: str,
    actor_id: Optional[str] = None,
    actor_type: str = "user",
    resource_type: Optional[str] = None,
    resource_id: Optional[str] = None,
    outcome: str = "success",
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log an audit event.

    Args:
        action: Action performed (e.g., "account.activate")
        actor_id: ID of the actor
        actor_type: Type of actor (user, service, system)
        resource_type: Type of resource affected
        resource_id: ID of the resource
        outcome: Result (success, failure)
        metadata: Additional context
    """
    logger = logging.getLogger("audit")

    extra_data = {
        "audit": True,
        "action": action,
        "actor": {"id": actor_id, "type": actor_type},
        "resource": {"type": resource_type, "id": resource_id},
        "outcome": outcome,
        "metadata": metadata or {},
    }

    logger.info(f"Audit: {action}", extra={"extra_data": extra_data})


def log_error(error: Exception, context: Optional[str] = None, **kwargs) -> None:
    """Log an error with its type and the surrounding context."""
    logger = logging.getLogger("errors")

    extra_data = {
        "error": True,
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context,
        "error_data": kwargs,
    }

    logger.error(
        f"Error: {context or type(error).__name__}",
        exc_info=error,
        extra={"extra_data": extra_data},
    )
