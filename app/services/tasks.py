import math
import uuid
from datetime import datetime, timezone

import structlog

from app.errors import InvalidDueDateError, InvalidIDError, NotFoundError
from app.models.tasks import Task, TaskPriority, TaskStatus
from app.repositories.base import TaskRepository
from app.schemas.task import PaginationMeta, TaskCreate, TaskQueryParams, TaskUpdate
from app.services.task_filter import build_filter

logger = structlog.get_logger()


def parse_task_id(task_id: str) -> str:
    try:
        return str(uuid.UUID(task_id))
    except (ValueError, TypeError, AttributeError):
        raise InvalidIDError()


def ensure_future(due_date: datetime) -> None:
    if due_date <= datetime.now(timezone.utc):
        raise InvalidDueDateError()


class TaskService:
    def __init__(self, tasks: TaskRepository):
        self.tasks = tasks

    async def create_task(self, data: TaskCreate) -> Task:
        status = data.status or TaskStatus.PENDING
        priority = data.priority or TaskPriority.MEDIUM

        if data.due_date is not None:
            ensure_future(data.due_date)

        task = Task(
            id=str(uuid.uuid4()),
            title=data.title,
            description=data.description,
            status=status.value,
            priority=priority.rank,
            due_date=data.due_date,
        )
        task = await self.tasks.create(task)
        logger.info("task_created", task_id=task.id)
        return task

    async def get_task(self, task_id: str) -> Task:
        task = await self.tasks.find_by_id(parse_task_id(task_id))
        if task is None:
            raise NotFoundError()
        return task

    async def list_tasks(self, params: TaskQueryParams) -> tuple[list[Task], PaginationMeta]:
        spec = build_filter(params)
        tasks, total = await self.tasks.find(spec)

        meta = PaginationMeta(
            total=total,
            page=spec.page,
            limit=spec.limit,
            total_pages=math.ceil(total / spec.limit),
        )
        return tasks, meta

    async def update_task(self, task_id: str, data: TaskUpdate) -> Task:
        task = await self.get_task(task_id)

        # Only a changed due date is re-validated; the stored one may be absent
        due_date_changed = data.due_date is not None and data.due_date != task.due_date
        if due_date_changed:
            ensure_future(data.due_date)

        # Empty values mean "leave unchanged", not "clear"
        if data.title:
            task.title = data.title
        if data.description:
            task.description = data.description
        if data.status:
            task.status = data.status.value
        if data.priority:
            task.priority = data.priority.rank
        if due_date_changed:
            task.due_date = data.due_date

        updated = await self.tasks.update(task)
        if updated is None:
            raise NotFoundError()
        logger.info("task_updated", task_id=updated.id)
        return updated

    async def delete_task(self, task_id: str) -> None:
        if not await self.tasks.delete(parse_task_id(task_id)):
            raise NotFoundError()
        logger.info("task_deleted", task_id=task_id)
