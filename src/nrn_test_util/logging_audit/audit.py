"""Audit trail functionality for the NRN Test Utility.

This module provides structured audit logging for generation and batch
validation runs.
"""

import time
import uuid
from typing import Any, Dict

from .logger import get_logger

logger = get_logger(__name__)

# Key fields, logged first and in this order
AUDIT_FIELD_ORDER = [
    "status",
    "input_file",
    "output_file",
    "record_count",
    "valid_count",
    "error_count",
    "duration",
    "error_message",
    "correlation_id",
]


def log_audit_event(event_type: str, details: Dict[str, Any]) -> None:
    """Log an audit trail event.

    Creates a structured audit log entry. Events are logged at INFO level,
    or ERROR level when ``details["status"]`` is ``"failure"``.

    Args:
        event_type: Type of operation (e.g., "NUMBERS_GENERATED", "CSV_VALIDATED")
        details: Dictionary with event details. Common fields include:
                - input_file / output_file: Paths involved
                - record_count: Number of records processed
                - status: "success" or "failure"
                - duration: Operation duration in seconds
                - error_message: Error details (if status is failure)
                - correlation_id: Optional correlation ID for related events

    Example:
        >>> log_audit_event("CSV_VALIDATED", {
        ...     "input_file": "numbers.csv",
        ...     "record_count": 100,
        ...     "error_count": 0,
        ...     "status": "success",
        ...     "duration": 0.4
        ... })
    """
    details = dict(details)
    details.setdefault("timestamp", time.time())
    details.setdefault("correlation_id", str(uuid.uuid4()))

    message_parts = [f"AUDIT [{event_type}]"]

    for field in AUDIT_FIELD_ORDER:
        if field in details:
            value = details[field]
            if field == "duration" and isinstance(value, (int, float)):
                message_parts.append(f"{field}={value:.2f}s")
            else:
                message_parts.append(f"{field}={value}")

    for key, value in details.items():
        if key not in AUDIT_FIELD_ORDER and key != "timestamp":
            message_parts.append(f"{key}={value}")

    audit_message = " | ".join(message_parts)

    if details.get("status", "unknown") == "failure":
        logger.error(audit_message)
    else:
        logger.info(audit_message)
