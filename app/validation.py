"""
Validation layer.

Each entity gets a pure function that takes the raw request payload and
returns a ValidationResult: the cleaned column values ready for persistence,
or the list of field errors. Nothing here touches HTTP or the database.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pydantic

from app.errors import ValidationError
from app.logger import get_logger
from schemas.task import TaskInput

logger = get_logger(__name__)

DEFAULT_ROLE = "member"


@dataclass
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    value: Dict[str, Any] = field(default_factory=dict)
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def first_message(self) -> Optional[str]:
        return self.errors[0].message if self.errors else None

    def raise_for_errors(self) -> Dict[str, Any]:
        """Return the cleaned value, or raise ValidationError with the first failing rule."""
        if self.errors:
            logger.info(f"Rejected input: {self.first_message}")
            raise ValidationError(self.first_message)
        return self.value


def _to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def format_pydantic_error(error: Dict[str, Any]) -> FieldError:
    """Turn one pydantic error entry into a FieldError named after the offending key."""
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    name = ".".join(loc) or "body"
    return FieldError(field=name, message=f"{name}: {error.get('msg', 'invalid value')}")


def validate_task(payload: Any) -> ValidationResult:
    """
    Validate a task body for create or update.

    The returned value maps model columns to cleaned values. It contains the
    keys the caller supplied plus priority and status, which always carry
    their defaults when absent.
    """
    try:
        task = TaskInput.model_validate(payload)
    except pydantic.ValidationError as exc:
        return ValidationResult(errors=[format_pydantic_error(e) for e in exc.errors()])

    columns = {
        "title": ("title", task.title),
        "description": ("description", task.description),
        "priority": ("priority", task.priority.value),
        "status": ("status", task.status.value),
        "assignee": ("assignee_id", task.assignee),
        "due_date": ("due_date", _to_utc_naive(task.due_date)),
    }
    provided = task.model_fields_set | {"priority", "status"}
    return ValidationResult(value=dict(columns[name] for name in provided))


def validate_member(payload: Dict[str, Any], partial: bool = False) -> ValidationResult:
    """
    Ad-hoc member checks.

    On create (partial=False) name and email are required and non-empty and
    role falls back to "member". On update only the supplied keys are checked
    and returned.
    """
    errors: List[FieldError] = []
    value: Dict[str, Any] = {}

    for name in ("name", "email"):
        raw = payload.get(name)
        if raw is None and partial:
            continue
        cleaned = (raw or "").strip()
        if not cleaned:
            message = f"{name} must not be empty" if partial else "Name and email are required"
            errors.append(FieldError(name, message))
            continue
        value[name] = cleaned

    role = payload.get("role")
    if role:
        value["role"] = role.strip() or DEFAULT_ROLE
    elif not partial:
        value["role"] = DEFAULT_ROLE

    return ValidationResult(value=value, errors=errors)


def validate_credentials(username: Optional[str], password: Optional[str]) -> ValidationResult:
    """Both fields must be present and non-empty. The password is never altered."""
    if not username or not password:
        return ValidationResult(errors=[FieldError("credentials", "Username and password are required")])
    return ValidationResult(value={"username": username, "password": password})
