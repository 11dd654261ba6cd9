# jobtracker/models.py
from __future__ import annotations
from datetime import date, datetime
from sqlalchemy import JSON, Date, DateTime, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base
from .record import utcnow
from .status import DEFAULT_PRIORITY, DEFAULT_STATUS

class ApplicationRow(Base):
    __tablename__ = "applications"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted max row again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    company: Mapped[str] = mapped_column(String(512), nullable=False)
    position: Mapped[str] = mapped_column(String(512), nullable=False)
    location: Mapped[str | None] = mapped_column(String(512), nullable=True)
    job_link: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    source: Mapped[str | None] = mapped_column(String(255), nullable=True)

    status: Mapped[str] = mapped_column(String(32), nullable=False, default=DEFAULT_STATUS.value)
    applied_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    follow_up_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    salary_min: Mapped[float | None] = mapped_column(Float, nullable=True)
    salary_max: Mapped[float | None] = mapped_column(Float, nullable=True)

    contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # RFC 5321 cap is 320 chars
    contact_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    resume_version: Mapped[str | None] = mapped_column(String(255), nullable=True)

    priority: Mapped[str] = mapped_column(String(16), nullable=False, default=DEFAULT_PRIORITY.value)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

# list_all sorts newest first; status is the common filter
Index("ix_applications_created_at", ApplicationRow.created_at)
Index("ix_applications_status", ApplicationRow.status)
