from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Protocol

from . import query, record
from .record import Application
from .status import ensure_status

logger = logging.getLogger(__name__)


class ApplicationStore(Protocol):
    """
    Persistence behind the service.

    Each call is one atomic read or write. ``get``, ``replace`` and ``delete``
    raise ``NotFoundError`` for an unknown id; any backend failure is raised
    as ``StorageError``. ``list_all`` returns the most recently created
    record first.
    """

    def get(self, application_id: int) -> Application: ...

    def insert(self, application: Application) -> Application: ...

    def replace(self, application_id: int, application: Application) -> Application: ...

    def delete(self, application_id: int) -> None: ...

    def list_all(self) -> list[Application]: ...


class ApplicationService:
    """The entry point the HTTP layer calls. Holds no state besides the store."""

    def __init__(self, store: ApplicationStore):
        self.store = store

    def create(self, payload: Mapping[str, Any]) -> Application:
        draft = record.validate_create(payload)
        created = self.store.insert(draft)
        logger.info("Created application %s (%s / %s)", created.id, created.company, created.position)
        return created

    def get(self, application_id: int) -> Application:
        return self.store.get(application_id)

    def list(self, status_filter: Optional[str] = None, q: Optional[str] = None) -> list[Application]:
        # blank means "no filter", as it does for the text query
        status_filter = (status_filter or "").strip()
        if status_filter:
            ensure_status(status_filter)
        return query.apply_filters(self.store.list_all(), status_filter, q)

    def update(self, application_id: int, patch: Mapping[str, Any]) -> Application:
        existing = self.store.get(application_id)
        updated = record.apply_patch(existing, patch)
        saved = self.store.replace(application_id, updated)
        if existing.status != saved.status:
            logger.info("Application %s moved %s -> %s", application_id, existing.status.value, saved.status.value)
        else:
            logger.info("Updated application %s", application_id)
        return saved

    def remove(self, application_id: int) -> None:
        self.store.delete(application_id)
        logger.info("Removed application %s", application_id)
