from datetime import datetime, date
from pydantic import BaseModel

from .status import Priority, Status

class ApplicationOut(BaseModel):
    id: int
    company: str
    position: str
    location: str | None = None
    job_link: str | None = None
    source: str | None = None
    status: Status
    applied_date: date | None = None
    follow_up_date: date | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    resume_version: str | None = None
    priority: Priority
    tags: list[str]
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

class FieldErrorOut(BaseModel):
    field: str
    message: str

class ErrorOut(BaseModel):
    detail: str
    errors: list[FieldErrorOut] = []

class HealthOut(BaseModel):
    status: str
    database: str
