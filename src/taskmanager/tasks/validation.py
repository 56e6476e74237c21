"""Field-level validation helpers for task input."""

from __future__ import annotations

from typing import Mapping, Optional

from .errors import TaskValidationError
from .models import TaskStatus

TITLE_BLANK_MESSAGE = "Title must not be blank"
STATUS_MISSING_MESSAGE = "Status must not be null"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_title(title: Optional[str]) -> dict[str, str]:
    """Return a field error mapping for ``title`` (empty when valid)."""

    if _is_blank(title):
        return {"title": TITLE_BLANK_MESSAGE}
    return {}


def validate_status(status: Optional[TaskStatus]) -> dict[str, str]:
    """Return a field error mapping for a required ``status``."""

    if status is None:
        return {"status": STATUS_MISSING_MESSAGE}
    return {}


def ensure_valid(*results: Mapping[str, str]) -> None:
    """Merge validation results and raise when any field failed."""

    errors: dict[str, str] = {}
    for result in results:
        errors.update(result)
    if errors:
        raise TaskValidationError(errors)


__all__ = [
    "STATUS_MISSING_MESSAGE",
    "TITLE_BLANK_MESSAGE",
    "ensure_valid",
    "validate_status",
    "validate_title",
]
