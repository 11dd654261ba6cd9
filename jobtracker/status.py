"""
Status and priority values for tracked applications.

Transitions are unconstrained: any status may move directly to any other
(an offer can fall through, a ghosted application can come back). The only
rule enforced here is membership in the enumerated set.
"""
from __future__ import annotations

from enum import Enum

from .errors import InvalidPriorityError, InvalidStatusError


class Status(str, Enum):
    saved = "saved"
    applied = "applied"
    interviewing = "interviewing"
    offer = "offer"
    rejected = "rejected"
    ghosted = "ghosted"


class Priority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


DEFAULT_STATUS = Status.applied
DEFAULT_PRIORITY = Priority.medium

_STATUS_VALUES = frozenset(s.value for s in Status)
_PRIORITY_VALUES = frozenset(p.value for p in Priority)


def is_valid_status(value) -> bool:
    # exact, case-sensitive match on the string value
    if isinstance(value, Status):
        return True
    return isinstance(value, str) and value in _STATUS_VALUES


def is_valid_priority(value) -> bool:
    if isinstance(value, Priority):
        return True
    return isinstance(value, str) and value in _PRIORITY_VALUES


def ensure_status(value) -> Status:
    if not is_valid_status(value):
        raise InvalidStatusError(value)
    return Status(value)


def ensure_priority(value) -> Priority:
    if not is_valid_priority(value):
        raise InvalidPriorityError(value)
    return Priority(value)


def transition(current: Status | str, next_status: Status | str) -> Status:
    """Move from ``current`` to ``next_status``; every pair of statuses is allowed."""
    return ensure_status(next_status)
