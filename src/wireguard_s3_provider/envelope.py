"""Parsing of inbound lifecycle events and serialization of responses."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from .constants import REQUEST_UPDATE
from .errors import PropertiesValidationError
from .models import LifecycleEvent, ReconciliationResult


def _format_errors(error: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc']) or 'event'}: {err['msg']}"
        for err in error.errors()
    ]


def parse_event(event: Any) -> LifecycleEvent:
    """Parse and validate a raw custom resource event.

    OldResourceProperties is only read for Update requests.

    Args:
        event: Event as delivered by the orchestration layer

    Returns:
        Validated lifecycle event

    Raises:
        PropertiesValidationError: If the event does not match the schema
    """
    if not isinstance(event, dict):
        raise PropertiesValidationError(
            f"Event must be an object, got {type(event).__name__}",
            [f"event: expected object, got {type(event).__name__}"],
        )

    payload = dict(event)
    if payload.get("RequestType") != REQUEST_UPDATE:
        payload.pop("OldResourceProperties", None)

    try:
        return LifecycleEvent.model_validate(payload)
    except ValidationError as e:
        errors = _format_errors(e)
        raise PropertiesValidationError(f"Invalid lifecycle event: {'; '.join(errors)}", errors) from e


def build_response(result: ReconciliationResult) -> dict[str, Any]:
    """Build the response envelope returned to the orchestration layer."""
    return {
        "PhysicalResourceId": result.physical_id,
        "Data": result.output_attributes,
    }
