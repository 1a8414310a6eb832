from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import get_current_session, get_task_service, require_csrf
from app.schemas.response import success_response
from app.schemas.task import TaskCreate, TaskListResponse, TaskQueryParams, TaskResponse, TaskUpdate
from app.services.tasks import TaskService

router = APIRouter(
    prefix="/api/v1/tasks",
    tags=["tasks"],
    dependencies=[Depends(get_current_session), Depends(require_csrf)],
)


def _task_data(task) -> dict:
    return TaskResponse.from_model(task).model_dump(exclude_none=True)


@router.get("")
async def list_tasks(
    params: Annotated[TaskQueryParams, Query()],
    task_service: TaskService = Depends(get_task_service),
):
    tasks, meta = await task_service.list_tasks(params)
    data = TaskListResponse(tasks=[TaskResponse.from_model(t) for t in tasks], meta=meta)
    return success_response("tasks retrieved successfully", data.model_dump(exclude_none=True))


@router.get("/{task_id}")
async def get_task(task_id: str, task_service: TaskService = Depends(get_task_service)):
    task = await task_service.get_task(task_id)
    return success_response("task retrieved successfully", _task_data(task))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(task_data: TaskCreate, task_service: TaskService = Depends(get_task_service)):
    task = await task_service.create_task(task_data)
    return success_response("task created successfully", _task_data(task))


@router.put("/{task_id}")
async def update_task(
    task_id: str,
    update_data: TaskUpdate,
    task_service: TaskService = Depends(get_task_service),
):
    task = await task_service.update_task(task_id, update_data)
    return success_response("task updated successfully", _task_data(task))


@router.delete("/{task_id}")
async def delete_task(task_id: str, task_service: TaskService = Depends(get_task_service)):
    await task_service.delete_task(task_id)
    return success_response("task deleted successfully")
