# taskboard/core/validation.py
"""Input rules shared by the services. Each check raises ValidationError."""

import re
from datetime import date, datetime
from typing import Optional

from ..models import TaskPriority, TaskStatus
from .errors import ValidationError

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

EMAIL_MAX_LENGTH = 254
PASSWORD_MIN_LENGTH = 6
PROJECT_NAME_MAX_LENGTH = 80
PROJECT_DESCRIPTION_MAX_LENGTH = 400


def validate_email(email: str) -> None:
    if len(email) > EMAIL_MAX_LENGTH:
        raise ValidationError("Email is too long")
    if not EMAIL_REGEX.match(email):
        raise ValidationError("Please enter a valid email address")


def validate_password(password: str) -> None:
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")


def validate_project_name(name: Optional[str]) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Project name is required")
    if len(name) > PROJECT_NAME_MAX_LENGTH:
        raise ValidationError(f"Project name must be {PROJECT_NAME_MAX_LENGTH} characters or less")
    return name


def validate_project_description(description: Optional[str]) -> str:
    if description is None:
        return ""
    if not isinstance(description, str):
        raise ValidationError("Description must be a string")
    if len(description) > PROJECT_DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description must be {PROJECT_DESCRIPTION_MAX_LENGTH} characters or less"
        )
    return description


def validate_status(status: str) -> str:
    try:
        return TaskStatus(status).value
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise ValidationError(f"Invalid status '{status}', expected one of: {allowed}")


def validate_priority(priority: str) -> str:
    try:
        return TaskPriority(priority).value
    except ValueError:
        allowed = ", ".join(p.value for p in TaskPriority)
        raise ValidationError(f"Invalid priority '{priority}', expected one of: {allowed}")


def normalize_due_date(due_date: Optional[str]) -> Optional[str]:
    """Empty means no due date; anything else must be an ISO-8601 date or datetime."""
    if due_date is None or due_date == "":
        return None
    if not isinstance(due_date, str):
        raise ValidationError("Due date must be a string")
    try:
        date.fromisoformat(due_date)
        return due_date
    except ValueError:
        pass
    try:
        datetime.fromisoformat(due_date.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Invalid due date '{due_date}'")
    return due_date
