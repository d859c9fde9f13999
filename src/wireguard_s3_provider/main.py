"""Lambda entry point for the S3 bucket custom resource."""

from __future__ import annotations

import logging
from typing import Any

from . import logging as structured_logging
from . import metrics
from .builders.gateway import get_gateway
from .constants import (
    CONTROLLER,
    EVENT_REASON_EVENT_RECEIVED,
    EVENT_REASON_RESPONSE_SENT,
    EVENT_REASON_VALIDATE_FAILED,
    KIND_BUCKET,
)
from .envelope import build_response, parse_event
from .errors import PropertiesValidationError
from .handlers.bucket import BucketHandler
from .tracing import initialize_tracing
from .utils.context import with_correlation_id

logger = logging.getLogger(__name__)

_configured = False


def configure() -> None:
    """Set up logging and tracing once per container."""
    global _configured
    if _configured:
        return
    structured_logging.setup_structured_logging()
    initialize_tracing()
    _configured = True


def _log(
    level: int,
    event: Any,
    log_event: str,
    reason: str,
    message: str,
    **kwargs: Any,
) -> None:
    # Raw events may be malformed, so identity fields fall back to "unknown"
    request_type = "unknown"
    bucket_name = "unknown"
    if isinstance(event, dict):
        request_type = str(event.get("RequestType", "unknown"))
        properties = event.get("ResourceProperties")
        if isinstance(properties, dict):
            bucket_name = str(properties.get("BucketName") or "unknown")

    structured_logging.log_resource_event(
        logger,
        controller=CONTROLLER,
        resource_kind=KIND_BUCKET,
        bucket_name=bucket_name,
        request_type=request_type,
        event=log_event,
        reason=reason,
        message=message,
        level=level,
        **kwargs,
    )


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle one custom resource lifecycle event.

    Args:
        event: Custom resource event (RequestType, ResourceProperties, ...)
        context: Lambda context (unused)

    Returns:
        Response envelope with PhysicalResourceId and Data

    Raises:
        PropertiesValidationError: If the event fails validation
        BucketProviderError: If a remote operation fails
    """
    configure()
    request_id = event.get("RequestId") if isinstance(event, dict) else None

    with with_correlation_id(request_id):
        logged_event = structured_logging.sanitize_secrets(event) if isinstance(event, dict) else event
        _log(logging.INFO, event, "info", EVENT_REASON_EVENT_RECEIVED, "Event received", raw_event=logged_event)

        try:
            try:
                lifecycle_event = parse_event(event)
            except PropertiesValidationError as e:
                request_type = str(event.get("RequestType", "unknown")) if isinstance(event, dict) else "unknown"
                metrics.error_total.labels(request_type=request_type, error_type=type(e).__name__).inc()
                _log(logging.ERROR, event, "error", EVENT_REASON_VALIDATE_FAILED,
                     "Event validation failed", errors=e.errors)
                raise

            result = BucketHandler(get_gateway()).reconcile(lifecycle_event)
        finally:
            metrics.push_metrics()

        response = build_response(result)
        _log(logging.INFO, event, "info", EVENT_REASON_RESPONSE_SENT, "Response", response=response)
        return response
