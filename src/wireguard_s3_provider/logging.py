"""Structured logging configuration for the WireGuard S3 bucket provider."""

import json
import logging
import os
import sys
from typing import Any

from .utils.context import get_context_dict
from .utils.errors import sanitize_dict

# Event fields that must never reach the logs verbatim
SECRET_FIELDS = {"access_key", "secret_key", "session_token", "password", "ResponseURL"}


def setup_structured_logging() -> None:
    """Configure structured JSON logging.

    Environment Variables:
        LOG_LEVEL: Root log level (default: INFO)
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # The Lambda runtime installs its own root handler, which makes basicConfig a no-op
    logging.getLogger().setLevel(level)


def log_resource_event(
    logger: logging.Logger,
    controller: str,
    resource_kind: str,
    bucket_name: str,
    request_type: str,
    event: str,
    reason: str,
    message: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """Log a structured resource event."""
    log_data = {
        "controller": controller,
        "resource": resource_kind,
        "bucket": bucket_name,
        "request_type": request_type,
        "event": event,
        "reason": reason,
        "message": message,
    }
    log_data.update(get_context_dict(kwargs))
    logger.log(level, json.dumps(log_data, default=str))


def sanitize_secrets(log_data: dict[str, Any]) -> dict[str, Any]:
    """Remove secret fields from log data, including nested properties."""
    return sanitize_dict(log_data, SECRET_FIELDS)
