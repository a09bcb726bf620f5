"""Structural validation and payload building for change request submissions.

Pure functions: no I/O. Payloads are JSON-ready (enum values as strings,
due dates as ISO 'YYYY-MM-DD').
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from app.domain.enums import TaskPriority, TaskStatus
from app.domain.exceptions import ValidationException
from app.domain.task_rules import (
    MUTABLE_TASK_FIELDS,
    NON_NULLABLE_TASK_FIELDS,
    TITLE_MAX_LENGTH,
)
from app.shared.utils.datetime import parse_iso_date
from app.shared.utils.sanitization import normalize_text, validate_identifier


def require_id(value: object, field: str) -> str:
    """Return a trimmed, well-formed identifier or raise ValidationException."""
    try:
        return validate_identifier(value)
    except ValueError:
        raise ValidationException(f"{field} must be a valid identifier", field=field) from None


def _text(value: object, field: str) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ValidationException(f"{field} must be a string", field=field)
    return normalize_text(value)


def _title(value: object) -> str:
    title = _text(value, "title")
    if title is None:
        raise ValidationException("Title is required", field="title")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationException(
            f"Title must be at most {TITLE_MAX_LENGTH} characters", field="title"
        )
    return title


def _priority(value: object) -> str:
    try:
        return TaskPriority.parse(value).value
    except ValueError as exc:
        raise ValidationException(str(exc), field="priority") from None


def _status(value: object) -> str:
    try:
        return TaskStatus.parse(value).value
    except ValueError as exc:
        raise ValidationException(str(exc), field="status") from None


def _due_date(value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, (str, date)):
        raise ValidationException("Due date must be an ISO date (YYYY-MM-DD)", field="due_date")
    try:
        parsed = parse_iso_date(value)
    except ValueError:
        raise ValidationException(
            "Due date must be an ISO date (YYYY-MM-DD)", field="due_date"
        ) from None
    return parsed.isoformat() if parsed else None


def _assignee(value: object) -> str | None:
    if value is None:
        return None
    return require_id(value, "assigned_to_user_id")


def normalize_reason(reason: object) -> str | None:
    return _text(reason, "reason")


def build_create_payload(
    *,
    title: object,
    description: object = None,
    priority: object = None,
    due_date: object = None,
    assigned_to_user_id: object = None,
) -> dict[str, Any]:
    """Full normalized attribute set for a CREATE. Priority defaults to MEDIUM."""
    return {
        "title": _title(title),
        "description": _text(description, "description"),
        "priority": _priority(priority) if priority is not None else TaskPriority.MEDIUM.value,
        "due_date": _due_date(due_date),
        "assigned_to_user_id": _assignee(assigned_to_user_id),
    }


_UPDATE_NORMALIZERS = {
    "title": _title,
    "description": lambda v: _text(v, "description"),
    "status": _status,
    "priority": _priority,
    "due_date": _due_date,
    "assigned_to_user_id": _assignee,
}


def build_update_payload(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Only the keys the caller sent, normalized. Partial-update semantics.

    A key present with None means "clear this field" and is kept; a key that
    was not sent is absent from the payload.
    """
    if not changes:
        raise ValidationException("At least one field must be provided for an update")
    unknown = sorted(set(changes) - MUTABLE_TASK_FIELDS)
    if unknown:
        raise ValidationException(f"Field not editable: {unknown[0]}", field=unknown[0])
    payload: dict[str, Any] = {}
    for key, value in changes.items():
        if value is None and key in NON_NULLABLE_TASK_FIELDS:
            raise ValidationException(f"{key} cannot be null", field=key)
        payload[key] = _UPDATE_NORMALIZERS[key](value)
    return payload
