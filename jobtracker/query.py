"""
Filtering for application lists.

Both filters are plain linear scans over the collection they are given and
keep its order. The working set is one person's applications, so there is no
index and no ranking.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from .record import Application


def filter_by_status(records: Iterable[Application], status: Optional[str]) -> list[Application]:
    records = list(records)
    if not status:
        return records
    # case-sensitive; Status members compare equal to their string value
    return [r for r in records if r.status == status]


def _matches(record: Application, needle: str) -> bool:
    haystacks = [record.company, record.position, record.notes or "", *record.tags]
    return any(needle in h.lower() for h in haystacks)


def search_text(records: Iterable[Application], query: Optional[str]) -> list[Application]:
    """Keep records whose company, position, notes or any tag contains ``query`` (case-insensitive)."""
    records = list(records)
    needle = (query or "").strip().lower()
    if not needle:
        return records
    return [r for r in records if _matches(r, needle)]


def apply_filters(
    records: Iterable[Application],
    status: Optional[str] = None,
    query: Optional[str] = None,
) -> list[Application]:
    return search_text(filter_by_status(records, status), query)
