"""Build a store-agnostic filter specification from task list query params."""

from dataclasses import dataclass
from datetime import datetime, timezone

from app.models.tasks import TaskPriority, TaskStatus
from app.schemas.task import TaskQueryParams

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = "desc"
SORT_FIELDS = ("created_at", "updated_at", "due_date", "priority", "title")

DUE_DATE_LAYOUT = "%Y-%m-%d"


@dataclass(frozen=True)
class FilterSpec:
    status: str | None = None
    priority: int | None = None
    search: str | None = None
    due_date_from: datetime | None = None
    due_date_to: datetime | None = None
    sort_by: str = DEFAULT_SORT_BY
    descending: bool = True
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def parse_due_date_bound(value: str | None) -> datetime | None:
    """Parse a YYYY-MM-DD bound as midnight UTC.

    Malformed values are ignored rather than rejected, so a bad bound simply
    does not filter.
    """
    if not value:
        return None
    try:
        return datetime.strptime(value, DUE_DATE_LAYOUT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def build_filter(params: TaskQueryParams) -> FilterSpec:
    page = params.page or DEFAULT_PAGE
    if page < 1:
        page = DEFAULT_PAGE

    limit = params.limit or DEFAULT_LIMIT
    if limit < 1:
        limit = DEFAULT_LIMIT
    if limit > MAX_LIMIT:
        limit = MAX_LIMIT

    sort_by = params.sort_by if params.sort_by in SORT_FIELDS else DEFAULT_SORT_BY
    sort_order = params.sort_order or DEFAULT_SORT_ORDER

    status = TaskStatus(params.status).value if params.status else None
    priority = TaskPriority(params.priority).rank if params.priority else None

    return FilterSpec(
        status=status,
        priority=priority,
        search=params.search or None,
        due_date_from=parse_due_date_bound(params.due_date_from),
        due_date_to=parse_due_date_bound(params.due_date_to),
        sort_by=sort_by,
        descending=sort_order != "asc",
        page=page,
        limit=limit,
    )
