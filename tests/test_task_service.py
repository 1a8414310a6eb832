import uuid
from datetime import datetime, timedelta, timezone

import pytest

from app.errors import InvalidDueDateError, InvalidIDError, NotFoundError
from app.models.tasks import Task
from app.schemas.task import TaskCreate, TaskQueryParams, TaskUpdate
from app.services.tasks import TaskService


@pytest.fixture
def service(task_repo):
    return TaskService(task_repo)


def _future(**kwargs):
    return datetime.now(timezone.utc) + timedelta(**kwargs)


async def test_create_applies_defaults(service):
    task = await service.create_task(TaskCreate(title="Write report"))

    assert uuid.UUID(task.id)
    assert task.status == "pending"
    assert task.priority == 2
    assert task.priority_name.value == "medium"
    assert task.description == ""
    assert task.due_date is None
    assert task.created_at == task.updated_at


async def test_create_keeps_given_fields(service):
    due = _future(hours=1)
    task = await service.create_task(
        TaskCreate(title="Ship", description="v2", status="in_progress", priority="high", due_date=due)
    )

    assert task.status == "in_progress"
    assert task.priority == 3
    assert task.description == "v2"
    assert task.due_date == due


@pytest.mark.parametrize("delta", [timedelta(seconds=-1), timedelta(days=-30)])
async def test_create_rejects_past_due_date(service, task_repo, delta):
    with pytest.raises(InvalidDueDateError):
        await service.create_task(TaskCreate(title="Late", due_date=datetime.now(timezone.utc) + delta))
    assert task_repo.tasks == {}


async def test_get_task(service):
    created = await service.create_task(TaskCreate(title="Find me"))
    assert (await service.get_task(created.id)) is created


async def test_get_task_accepts_uppercase_id(service):
    created = await service.create_task(TaskCreate(title="Find me"))
    assert (await service.get_task(created.id.upper())) is created


@pytest.mark.parametrize("task_id", ["not-a-uuid", "", "123", "g" * 32])
async def test_malformed_id(service, task_id):
    with pytest.raises(InvalidIDError):
        await service.get_task(task_id)
    with pytest.raises(InvalidIDError):
        await service.delete_task(task_id)


async def test_unknown_id(service):
    with pytest.raises(NotFoundError):
        await service.get_task(str(uuid.uuid4()))
    with pytest.raises(NotFoundError):
        await service.update_task(str(uuid.uuid4()), TaskUpdate(title="Nothing"))
    with pytest.raises(NotFoundError):
        await service.delete_task(str(uuid.uuid4()))


async def test_update_overwrites_non_empty_fields(service):
    created = await service.create_task(TaskCreate(title="Draft", description="first"))
    before = created.updated_at

    updated = await service.update_task(
        created.id, TaskUpdate(title="Final", status="completed", priority="low")
    )

    assert updated.title == "Final"
    assert updated.status == "completed"
    assert updated.priority == 1
    # Empty description means unchanged
    assert updated.description == "first"
    assert updated.updated_at >= before


async def test_update_leaves_due_date_when_omitted(service):
    created = await service.create_task(TaskCreate(title="No deadline"))

    updated = await service.update_task(created.id, TaskUpdate(title="Still none"))

    assert updated.due_date is None


async def test_update_unchanged_past_due_date_is_allowed(service, task_repo):
    created = await service.create_task(TaskCreate(title="Overdue", due_date=_future(hours=1)))
    # Let the stored deadline pass
    past = datetime.now(timezone.utc) - timedelta(days=1)
    task_repo.tasks[created.id].due_date = past

    updated = await service.update_task(created.id, TaskUpdate(title="Overdue", due_date=past))

    assert updated.due_date == past


async def test_update_rejects_new_past_due_date(service):
    created = await service.create_task(TaskCreate(title="Move it"))

    with pytest.raises(InvalidDueDateError):
        await service.update_task(
            created.id, TaskUpdate(title="Move it", due_date=datetime.now(timezone.utc) - timedelta(hours=1))
        )


async def test_update_sets_new_future_due_date(service):
    created = await service.create_task(TaskCreate(title="Move it"))
    due = _future(days=2)

    updated = await service.update_task(created.id, TaskUpdate(title="Move it", due_date=due))

    assert updated.due_date == due


async def test_update_race_with_delete(service, task_repo):
    created = await service.create_task(TaskCreate(title="Going away"))

    async def vanished(task):
        return None

    task_repo.update = vanished
    with pytest.raises(NotFoundError):
        await service.update_task(created.id, TaskUpdate(title="Too late"))


async def test_delete(service, task_repo):
    created = await service.create_task(TaskCreate(title="Remove"))

    await service.delete_task(created.id)

    assert created.id not in task_repo.tasks
    with pytest.raises(NotFoundError):
        await service.delete_task(created.id)


async def test_list_meta_rounds_pages_up(service, task_repo):
    for i in range(25):
        await service.create_task(TaskCreate(title=f"Task {i:02d}"))

    tasks, meta = await service.list_tasks(TaskQueryParams(page=3, limit=10))

    assert len(tasks) == 5
    assert meta.model_dump() == {"total": 25, "page": 3, "limit": 10, "total_pages": 3}


async def test_list_empty(service):
    tasks, meta = await service.list_tasks(TaskQueryParams())

    assert tasks == []
    assert meta.model_dump() == {"total": 0, "page": 1, "limit": 10, "total_pages": 0}


async def test_list_passes_translated_filter(service, task_repo):
    await service.list_tasks(TaskQueryParams(priority="high", sort_by="title", sort_order="asc"))

    spec = task_repo.last_spec
    assert spec.priority == 3
    assert spec.sort_by == "title"
    assert spec.descending is False


async def test_list_filters_by_priority(service, task_repo):
    await service.create_task(TaskCreate(title="Urgent", priority="high"))
    await service.create_task(TaskCreate(title="Someday", priority="low"))

    tasks, meta = await service.list_tasks(TaskQueryParams(priority="high"))

    assert [t.title for t in tasks] == ["Urgent"]
    assert meta.total == 1


def test_task_priority_name_round_trips():
    assert Task(priority=1).priority_name.value == "low"
    assert Task(priority=3).priority_name.value == "high"
