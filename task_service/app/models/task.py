from dataclasses import dataclass, field
from typing import List, Optional

from .user import User


@dataclass
class Task:
    """Task record; columns and the assignee relation are mapped in ``mapping``."""

    id: int = field(init=False)
    name: Optional[str] = None
    content: Optional[str] = None
    status: Optional[str] = None
    deadline: Optional[str] = None
    users: List[User] = field(default_factory=list)

    def __repr__(self):
        return f"<Task(id={self.id}, name='{self.name}', status='{self.status}')>"
