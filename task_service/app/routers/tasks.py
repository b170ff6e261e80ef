import logging
import re
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.errors import NotFoundError
from ..core.repository import Repository
from ..models.task import Task
from ..models.user import User
from ..schemas.task import (
    CreateTaskRequest, UpdateTaskRequest, RemoveTaskRequest, TaskResponse, TaskUser
)
from ..services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter()

# Decimal digits with an optional sign, within a signed 64-bit column
ID_PATTERN = re.compile(r"-?[0-9]+")
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Build the service around repositories bound to the request's session"""
    return TaskService(Repository(db, Task), Repository(db, User))


def parse_task_id(raw_id: str) -> int:
    """Coerce a path id to an integer; anything that cannot be a task id is not found"""
    if not ID_PATTERN.fullmatch(raw_id):
        raise NotFoundError(f"Task {raw_id} not found")
    task_id = int(raw_id)
    # Out of range for the id column
    if not MIN_ID <= task_id <= MAX_ID:
        raise NotFoundError(f"Task {raw_id} not found")
    return task_id


def to_response(task: Task, include_users: bool = False) -> TaskResponse:
    """Convert a task to its response model while the session is still open"""
    return TaskResponse(
        id=task.id,
        name=task.name,
        content=task.content,
        status=task.status,
        deadline=task.deadline,
        users=[TaskUser.model_validate(user) for user in task.users] if include_users else None,
    )


# Collection routes answer on both /tasks and /tasks/
@router.get("", response_model=List[TaskResponse], response_model_exclude_none=True, include_in_schema=False)
@router.get("/", response_model=List[TaskResponse], response_model_exclude_none=True)
def get_tasks(service: TaskService = Depends(get_task_service)):
    """Retrieve a list of tasks"""
    return [to_response(task) for task in service.find_all()]


@router.post("", response_model=TaskResponse, response_model_exclude_none=True, include_in_schema=False)
@router.post("/", response_model=TaskResponse, response_model_exclude_none=True)
def create_task(
    task_data: CreateTaskRequest,
    service: TaskService = Depends(get_task_service)
):
    """Create task; the response carries its assigned users, as findById does"""
    return to_response(service.create(task_data), include_users=True)


@router.put("", response_model=TaskResponse, response_model_exclude_none=True, include_in_schema=False)
@router.put("/", response_model=TaskResponse, response_model_exclude_none=True)
def update_task(
    task_update: UpdateTaskRequest,
    service: TaskService = Depends(get_task_service)
):
    """Update task"""
    task = service.update(task_update)
    return to_response(task, include_users=task_update.users is not None)


@router.delete("", response_model=TaskResponse, response_model_exclude_none=True, include_in_schema=False)
@router.delete("/", response_model=TaskResponse, response_model_exclude_none=True)
def delete_task(
    task_remove: RemoveTaskRequest,
    service: TaskService = Depends(get_task_service)
):
    """Delete task"""
    return to_response(service.remove(task_remove))


@router.get("/findById/{task_id}", response_model=TaskResponse, response_model_exclude_none=True)
def find_task_by_id(task_id: str, service: TaskService = Depends(get_task_service)):
    """Retrieve a single task by ID, with its assigned users"""
    return to_response(service.find_by_id(parse_task_id(task_id)), include_users=True)


@router.get("/findByName/{name}", response_model=TaskResponse, response_model_exclude_none=True)
def find_task_by_name(name: str, service: TaskService = Depends(get_task_service)):
    """Retrieve a single task by name"""
    return to_response(service.find_by_name(name))
