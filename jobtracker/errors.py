"""
Error types raised by the tracker core.

The HTTP layer maps these to status codes; nothing here knows about FastAPI.
"""
from __future__ import annotations

from dataclasses import dataclass


class TrackerError(Exception):
    pass


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class ValidationError(TrackerError):
    """One or more field-level violations, collected before raising."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(summary or "invalid application")

    @property
    def fields(self) -> set[str]:
        return {e.field for e in self.errors}


class InvalidStatusError(TrackerError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid status: {value!r}")


class InvalidPriorityError(TrackerError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid priority: {value!r}")


class NotFoundError(TrackerError):
    def __init__(self, application_id):
        self.application_id = application_id
        super().__init__(f"application {application_id} not found")


class StorageError(TrackerError):
    pass
