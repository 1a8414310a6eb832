from datetime import datetime, timezone

from sqlalchemy import delete, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.tasks import Task
from app.services.task_filter import FilterSpec

SORT_COLUMNS = {
    "created_at": Task.created_at,
    "updated_at": Task.updated_at,
    "due_date": Task.due_date,
    "priority": Task.priority,
    "title": Task.title,
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def filter_clauses(spec: FilterSpec) -> list:
    """Translate a FilterSpec into SQLAlchemy WHERE clauses."""
    clauses = []

    if spec.status:
        clauses.append(Task.status == spec.status)
    if spec.priority is not None:
        clauses.append(Task.priority == spec.priority)

    if spec.search:
        pattern = f"%{_escape_like(spec.search)}%"
        clauses.append(or_(
            Task.title.ilike(pattern, escape="\\"),
            Task.description.ilike(pattern, escape="\\"),
        ))

    if spec.due_date_from is not None:
        clauses.append(Task.due_date >= spec.due_date_from)
    if spec.due_date_to is not None:
        clauses.append(Task.due_date <= spec.due_date_to)

    return clauses


class SqlTaskRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, task: Task) -> Task:
        now = datetime.now(timezone.utc)
        task.created_at = now
        task.updated_at = now
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)
        return task

    async def find_by_id(self, task_id: str) -> Task | None:
        return await self.db.get(Task, task_id)

    async def find(self, spec: FilterSpec) -> tuple[list[Task], int]:
        clauses = filter_clauses(spec)

        count_query = select(func.count()).select_from(Task).filter(*clauses)
        total = (await self.db.execute(count_query)).scalar_one()

        column = SORT_COLUMNS.get(spec.sort_by, Task.created_at)
        order = column.desc() if spec.descending else column.asc()

        query = (
            select(Task)
            .filter(*clauses)
            .order_by(order)
            .offset(spec.skip)
            .limit(spec.limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def update(self, task: Task) -> Task | None:
        existing = await self.db.get(Task, task.id)
        if existing is None:
            return None
        existing.title = task.title
        existing.description = task.description
        existing.status = task.status
        existing.priority = task.priority
        existing.due_date = task.due_date
        existing.updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(existing)
        return existing

    async def delete(self, task_id: str) -> bool:
        result = await self.db.execute(delete(Task).where(Task.id == task_id))
        await self.db.commit()
        return result.rowcount > 0
