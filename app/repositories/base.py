"""Persistence interfaces the services depend on.

Implementations return ``None`` for absent records; turning absence into an
error is the service layer's job.
"""

from typing import Protocol

from app.models.tasks import Task
from app.models.user import User
from app.services.task_filter import FilterSpec


class UserRepository(Protocol):
    async def create(self, user: User) -> User:
        """Persist a new user.

        Raises:
            EmailExistsError: the email is already taken, including when a
                concurrent insert wins the race.
        """
        ...

    async def find_by_email(self, email: str) -> User | None: ...

    async def find_by_id(self, user_id: str) -> User | None: ...

    async def update(self, user: User) -> User | None: ...


class TaskRepository(Protocol):
    async def create(self, task: Task) -> Task: ...

    async def find_by_id(self, task_id: str) -> Task | None: ...

    async def find(self, spec: FilterSpec) -> tuple[list[Task], int]:
        """Return one page of matching tasks and the total match count."""
        ...

    async def update(self, task: Task) -> Task | None: ...

    async def delete(self, task_id: str) -> bool:
        """Return False when no task had that id."""
        ...
