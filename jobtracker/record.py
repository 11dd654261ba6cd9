"""
The Application record: validation and normalization of inbound payloads.

Creation and partial updates both end in a full validation of the resulting
record, so every invariant is checked no matter which fields were touched.
Pydantic collects all field errors in one pass; they are re-raised as a
single ``errors.ValidationError``.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from typing import Annotated, Any, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from .errors import FieldError, InvalidStatusError, ValidationError
from .status import DEFAULT_PRIORITY, DEFAULT_STATUS, Priority, Status, ensure_priority, ensure_status, transition

TEXT_FIELDS = (
    "company",
    "position",
    "location",
    "job_link",
    "source",
    "contact_name",
    "contact_email",
    "resume_version",
    "notes",
)
# Empty input for these means "unset" (None), never "" or 0.
NULLABLE_FIELDS = (
    "location",
    "job_link",
    "source",
    "applied_date",
    "follow_up_date",
    "salary_min",
    "salary_max",
    "contact_name",
    "contact_email",
    "resume_version",
    "notes",
)
EDITABLE_FIELDS = (
    "company",
    "position",
    "location",
    "job_link",
    "source",
    "status",
    "applied_date",
    "follow_up_date",
    "salary_min",
    "salary_max",
    "contact_name",
    "contact_email",
    "resume_version",
    "priority",
    "tags",
    "notes",
)
SERVER_FIELDS = ("id", "created_at", "updated_at")

# non-negative and finite; inf would not survive a JSON round trip
Salary = Annotated[float, Field(ge=0, allow_inf_nan=False)]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_tags(value: Any) -> list[str]:
    """
    Turn a comma-separated string or a sequence of strings into a clean tag list.

    Entries are trimmed, empty ones dropped, duplicates (case-sensitive)
    removed keeping the first occurrence. Normalizing an already clean list
    returns it unchanged.
    """
    if value is None:
        return []
    if isinstance(value, str):
        parts: Iterable[Any] = value.split(",")
    elif isinstance(value, Iterable) and not isinstance(value, (bytes, Mapping)):
        parts = value
    else:
        raise PydanticCustomError("tags_type", "tags must be a list of strings or a comma-separated string")

    tags: list[str] = []
    for part in parts:
        if not isinstance(part, str):
            raise PydanticCustomError("tags_type", "each tag must be a string")
        tag = part.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def normalize(payload: Mapping[str, Any]) -> dict[str, Any]:
    """
    Canonicalize a raw payload before validation.

    Strings are trimmed, a tag string is split, and empty optional values
    become None. Keys that are not present stay absent, which is what lets
    a patch tell "leave alone" from "clear".
    """
    data = dict(payload)
    for key, value in data.items():
        if isinstance(value, str):
            data[key] = value.strip()
    for key in NULLABLE_FIELDS:
        if key in data and data[key] == "":
            data[key] = None
    if "tags" in data:
        try:
            data["tags"] = normalize_tags(data["tags"])
        except PydanticCustomError:
            # left as-is so the field validator reports it against "tags"
            pass
    return data


class Application(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore", str_strip_whitespace=True)

    id: Optional[int] = None

    company: str = Field(min_length=1)
    position: str = Field(min_length=1)
    location: Optional[str] = None
    job_link: Optional[str] = None
    source: Optional[str] = None

    status: Status = DEFAULT_STATUS
    applied_date: Optional[date] = None
    follow_up_date: Optional[date] = None

    salary_min: Optional[Salary] = None
    salary_max: Optional[Salary] = None

    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    resume_version: Optional[str] = None

    priority: Priority = DEFAULT_PRIORITY
    tags: list[str] = Field(default_factory=list)
    notes: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return normalize(data)
        return data

    @field_validator("status", mode="before")
    @classmethod
    def _check_status(cls, v: Any) -> Status:
        return ensure_status(v)

    @field_validator("priority", mode="before")
    @classmethod
    def _check_priority(cls, v: Any) -> Priority:
        return ensure_priority(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _check_tags(cls, v: Any) -> list[str]:
        return normalize_tags(v)

    @field_validator("salary_min", "salary_max", mode="before")
    @classmethod
    def _reject_bool_salary(cls, v: Any) -> Any:
        # bool is an int subclass; true must not become 1.0
        if isinstance(v, bool):
            raise PydanticCustomError("salary_type", "salary must be a number")
        return v

    @field_validator("salary_max")
    @classmethod
    def _check_salary_order(cls, v: Optional[float], info: pydantic.ValidationInfo) -> Optional[float]:
        # salary_min is declared first, so it is in info.data when it validated
        low = info.data.get("salary_min")
        if v is not None and low is not None and low > v:
            raise PydanticCustomError(
                "salary_order",
                "salary_min ({low}) must not exceed salary_max ({high})",
                {"low": low, "high": v},
            )
        return v

    def editable_fields(self) -> dict[str, Any]:
        return self.model_dump(include=set(EDITABLE_FIELDS))


def _field_errors(exc: pydantic.ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else "__root__"
        message = err.get("msg", "invalid value")
        ctx = err.get("ctx") or {}
        if err.get("type") == "value_error" and "error" in ctx:
            # our own ValueErrors (InvalidStatusError, ...) carry the message without pydantic's prefix
            message = str(ctx["error"])
        if err.get("type") == "salary_order":
            errors.append(FieldError("salary_min", message))
            errors.append(FieldError("salary_max", message))
        else:
            errors.append(FieldError(field, message))
    return errors


def _validate(data: Mapping[str, Any]) -> Application:
    try:
        return Application.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(_field_errors(exc)) from exc


def _require_mapping(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError([FieldError("__root__", "payload must be an object")])
    return payload


def validate_create(payload: Mapping[str, Any]) -> Application:
    """Validate a creation payload; id and timestamps are left for storage to assign."""
    payload = _require_mapping(payload)
    data = {k: v for k, v in payload.items() if k not in SERVER_FIELDS}
    return _validate(data)


def apply_patch(existing: Application, patch: Mapping[str, Any]) -> Application:
    """
    Merge ``patch`` into ``existing`` and validate the result as a whole.

    Only keys present in the patch change. Unknown and server-assigned keys
    are ignored. ``existing`` is not modified; a failed patch raises
    ``ValidationError`` and returns nothing. A new status goes through
    ``status.transition`` from the current one.
    """
    patch = _require_mapping(patch)
    merged = existing.editable_fields()
    merged.update({k: v for k, v in patch.items() if k in EDITABLE_FIELDS and k != "status"})

    errors: list[FieldError] = []
    if "status" in patch:
        next_status = patch["status"]
        if isinstance(next_status, str):
            next_status = next_status.strip()
        try:
            merged["status"] = transition(existing.status, next_status)
        except InvalidStatusError as exc:
            errors.append(FieldError("status", str(exc)))

    try:
        updated = _validate(merged)
    except ValidationError as exc:
        errors.extend(exc.errors)
    if errors:
        raise ValidationError(errors)
    return updated.model_copy(
        update={"id": existing.id, "created_at": existing.created_at, "updated_at": utcnow()}
    )
