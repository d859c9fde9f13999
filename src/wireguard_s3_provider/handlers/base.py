"""Base handler class with common functionality for lifecycle handlers."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from .. import metrics
from ..constants import (
    CONTROLLER,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_RECONCILE_SUCCEEDED,
)
from ..logging import log_resource_event
from ..models import LifecycleEvent, ReconciliationResult
from ..utils.errors import sanitize_exception


class BaseHandler:
    """Base class for lifecycle handlers with logging and metrics plumbing."""

    def __init__(self, kind: str):
        """Initialize base handler.

        Args:
            kind: The managed resource kind (e.g., "Bucket")
        """
        self.kind = kind
        self.logger = logging.getLogger(__name__)

    def _get_resource_context(self, event: LifecycleEvent) -> dict[str, Any]:
        """Extract common resource context from a lifecycle event."""
        return {
            "bucket_name": event.desired.bucket_name,
            "request_type": event.request_type.value,
            "logical_resource_id": event.logical_resource_id or "unknown",
        }

    def _log(
        self,
        level: int,
        event: LifecycleEvent,
        message: str,
        log_event: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        ctx = self._get_resource_context(event)
        log_resource_event(
            self.logger,
            controller=CONTROLLER,
            resource_kind=self.kind,
            bucket_name=ctx["bucket_name"],
            request_type=ctx["request_type"],
            event=log_event,
            reason=reason,
            message=message,
            level=level,
            logical_resource_id=ctx["logical_resource_id"],
            **kwargs,
        )

    def log_info(
        self,
        event: LifecycleEvent,
        message: str,
        reason: str = "Info",
        **kwargs: Any,
    ) -> None:
        """Log an info-level structured log message.

        Args:
            event: Lifecycle event being handled
            message: Log message
            reason: Reason for the event (default: "Info")
            **kwargs: Additional fields to include in the log
        """
        self._log(logging.INFO, event, message, "info", reason, **kwargs)

    def log_warning(
        self,
        event: LifecycleEvent,
        message: str,
        reason: str = "Warning",
        **kwargs: Any,
    ) -> None:
        """Log a warning-level structured log message."""
        self._log(logging.WARNING, event, message, "warning", reason, **kwargs)

    def log_error(
        self,
        event: LifecycleEvent,
        message: str,
        error: BaseException | None = None,
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message.

        Args:
            event: Lifecycle event being handled
            message: Log message
            error: Optional exception to include sanitized error details
            reason: Reason for the event (default: "Error")
            **kwargs: Additional fields to include in the log
        """
        log_data = kwargs.copy()

        if error is not None:
            log_data["error"] = sanitize_exception(error)
            log_data["error_type"] = type(error).__name__

        self._log(logging.ERROR, event, message, "error", reason, **log_data)

    def reconcile_with_metrics(
        self,
        event: LifecycleEvent,
        reconcile_fn: Callable[[], ReconciliationResult],
    ) -> ReconciliationResult:
        """Execute reconciliation with metrics and error handling.

        Args:
            event: Lifecycle event being handled
            reconcile_fn: Function performing the reconciliation

        Returns:
            The reconciliation result
        """
        request_type = event.request_type.value
        self.log_info(event, f"{request_type} requested for bucket {event.desired.bucket_name}",
                      reason=EVENT_REASON_RECONCILE_STARTED)
        metrics.reconcile_total.labels(request_type=request_type, result="started").inc()

        start_time = time.time()
        try:
            result = reconcile_fn()
        except Exception as e:
            metrics.error_total.labels(request_type=request_type, error_type=type(e).__name__).inc()
            metrics.reconcile_total.labels(request_type=request_type, result="error").inc()
            self.log_error(event, "Reconciliation failed", error=e, reason=EVENT_REASON_RECONCILE_FAILED)
            raise
        finally:
            duration = time.time() - start_time
            metrics.reconcile_duration_seconds.labels(request_type=request_type).observe(duration)

        metrics.reconcile_total.labels(request_type=request_type, result="success").inc()
        self.log_info(event, f"Reconciliation finished: {result.action}",
                      reason=EVENT_REASON_RECONCILE_SUCCEEDED,
                      physical_resource_id=result.physical_id, action=result.action)
        return result
