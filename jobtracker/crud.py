from __future__ import annotations
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models
from .errors import NotFoundError, StorageError
from .record import EDITABLE_FIELDS, Application, utcnow

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back; every stored timestamp is UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_record(row: models.ApplicationRow) -> Application:
    data = {name: getattr(row, name) for name in EDITABLE_FIELDS}
    data["tags"] = list(row.tags or [])
    data["id"] = row.id
    data["created_at"] = _as_utc(row.created_at)
    data["updated_at"] = _as_utc(row.updated_at)
    return Application.model_validate(data)


def _write_fields(row: models.ApplicationRow, application: Application) -> None:
    for name, value in application.editable_fields().items():
        if name in ("status", "priority"):
            value = value.value
        setattr(row, name, value)


@contextmanager
def _storage_errors(db: Session, action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Storage failure while trying to %s", action)
        raise StorageError(f"could not {action}") from exc


def _get_row(db: Session, application_id: int) -> models.ApplicationRow:
    row = db.get(models.ApplicationRow, application_id)
    if row is None:
        raise NotFoundError(application_id)
    return row


def get_application(db: Session, application_id: int) -> Application:
    with _storage_errors(db, f"load application {application_id}"):
        row = _get_row(db, application_id)
    return to_record(row)


def insert_application(db: Session, application: Application) -> Application:
    """Persist a new application; the database assigns id, both timestamps are set to now."""
    now = utcnow()
    row = models.ApplicationRow(created_at=now, updated_at=now)
    _write_fields(row, application)
    with _storage_errors(db, "insert application"):
        db.add(row)
        db.commit()
        db.refresh(row)
    return to_record(row)


def replace_application(db: Session, application_id: int, application: Application) -> Application:
    """Overwrite the editable fields of an existing row. id and created_at are never touched."""
    with _storage_errors(db, f"replace application {application_id}"):
        row = _get_row(db, application_id)
        _write_fields(row, application)
        row.updated_at = application.updated_at or utcnow()
        db.commit()
        db.refresh(row)
    return to_record(row)


def delete_application(db: Session, application_id: int) -> None:
    with _storage_errors(db, f"delete application {application_id}"):
        row = _get_row(db, application_id)
        db.delete(row)
        db.commit()


def list_applications(db: Session) -> list[Application]:
    """All applications, most recently created first (ties broken by id, newest first)."""
    with _storage_errors(db, "list applications"):
        rows = db.execute(
            select(models.ApplicationRow).order_by(
                models.ApplicationRow.created_at.desc(), models.ApplicationRow.id.desc()
            )
        ).scalars().all()
    return [to_record(row) for row in rows]


class SqlApplicationStore:
    """ApplicationStore backed by a SQLAlchemy session (one per request)."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, application_id: int) -> Application:
        return get_application(self.db, application_id)

    def insert(self, application: Application) -> Application:
        return insert_application(self.db, application)

    def replace(self, application_id: int, application: Application) -> Application:
        return replace_application(self.db, application_id, application)

    def delete(self, application_id: int) -> None:
        delete_application(self.db, application_id)

    def list_all(self) -> list[Application]:
        return list_applications(self.db)
