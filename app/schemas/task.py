from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.models.tasks import TaskPriority, TaskStatus

SortField = Literal["created_at", "updated_at", "due_date", "priority", "title"]
SortOrder = Literal["asc", "desc"]


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_due_date(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _blank_to_none(v):
    if isinstance(v, str) and v == "":
        return None
    return v


# ── Request bodies ──────────────────────────────────────

class TaskBase(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field("", max_length=2000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None

    @field_validator("status", "priority", "due_date", mode="before")
    @classmethod
    def blank_is_absent(cls, v):
        return _blank_to_none(v)

    @field_validator("description", mode="before")
    @classmethod
    def null_description(cls, v):
        return "" if v is None else v

    @field_validator("due_date")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class TaskCreate(TaskBase):
    pass


class TaskUpdate(TaskBase):
    """Full-field update body.

    Empty or omitted optional fields leave the stored value unchanged.
    """


# ── Query string ────────────────────────────────────────

class TaskQueryParams(BaseModel):
    page: int | None = Field(None, ge=1)
    limit: int | None = Field(None, ge=1, le=100)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    search: str | None = None
    due_date_from: str | None = None
    due_date_to: str | None = None
    sort_by: SortField | None = None
    sort_order: SortOrder | None = None

    @field_validator("page", "limit", mode="before")
    @classmethod
    def zero_is_absent(cls, v):
        if v in (0, "0", ""):
            return None
        return v

    @field_validator("status", "priority", "sort_by", "sort_order", mode="before")
    @classmethod
    def blank_is_absent(cls, v):
        return _blank_to_none(v)


# ── Responses ───────────────────────────────────────────

class TaskResponse(BaseModel):
    id: str
    title: str
    description: str
    status: str
    priority: str
    due_date: str | None = None
    created_at: str
    updated_at: str

    @classmethod
    def from_model(cls, task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description or "",
            status=TaskStatus(task.status).value,
            priority=task.priority_name.value,
            due_date=format_due_date(task.due_date),
            created_at=format_timestamp(task.created_at),
            updated_at=format_timestamp(task.updated_at),
        )


class PaginationMeta(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class TaskListResponse(BaseModel):
    tasks: list[TaskResponse]
    meta: PaginationMeta
