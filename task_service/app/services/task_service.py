"""
Task operations on top of the repository.

Each method maps to one route. Lookups that match nothing raise
``NotFoundError``; database failures arrive from the repository as
``PersistenceError`` and are passed through untouched.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import selectinload

from ..core.errors import NotFoundError, PersistenceError
from ..core.repository import Repository
from ..models.task import Task
from ..models.user import User
from ..schemas.task import (
    CreateTaskRequest, UpdateTaskRequest, RemoveTaskRequest, TaskUser
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "content", "status", "deadline")


class TaskService:
    """Facade over the task and user repositories."""

    def __init__(self, tasks: Repository[Task], users: Repository[User]):
        self.tasks = tasks
        self.users = users

    def find_all(self) -> List[Task]:
        return self.tasks.find_all()

    def find_by_id(self, task_id: int) -> Task:
        """Return the task with its assignees loaded."""
        task = self.tasks.find_one(Task.id == task_id, options=[selectinload(Task.users)])
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        return task

    def find_by_name(self, name: str) -> Task:
        task = self.tasks.find_one(Task.name == name)
        if task is None:
            raise NotFoundError(f"Task named '{name}' not found")
        return task

    def create(self, request: CreateTaskRequest) -> Task:
        task = Task(
            name=request.name,
            content=request.content,
            status=request.status,
            deadline=request.deadline,
        )
        if request.users:
            task.users = self._resolve_users(request.users)

        task = self.tasks.save(task)
        logger.info(f"Created task {task.id}")
        return task

    def update(self, request: UpdateTaskRequest) -> Task:
        task = self._get(request.id)

        update_data = request.model_dump(exclude_unset=True)
        for field in UPDATABLE_FIELDS:
            if field in update_data:
                setattr(task, field, update_data[field])
        if request.users is not None:
            task.users = self._resolve_users(request.users)

        task = self.tasks.save(task)
        logger.info(f"Updated task {task.id}")
        return task

    def remove(self, request: RemoveTaskRequest) -> Task:
        task = self._get(request.id)
        self.tasks.remove(task)
        logger.info(f"Removed task {request.id}")
        return task

    def _get(self, task_id: int) -> Task:
        task: Optional[Task] = self.tasks.find_one(Task.id == task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        return task

    def _resolve_users(self, refs: List[TaskUser]) -> List[User]:
        """Load assignees by id; an unknown id violates the join table's foreign key."""
        ids = list(dict.fromkeys(ref.id for ref in refs))
        users = self.users.find_by_ids(ids)
        missing = set(ids) - {user.id for user in users}
        if missing:
            raise PersistenceError(
                f"Cannot assign unknown users: {', '.join(str(i) for i in sorted(missing))}"
            )
        return users
