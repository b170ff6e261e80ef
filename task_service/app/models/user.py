from dataclasses import dataclass, field
from typing import Optional


@dataclass
class User:
    """Task assignee, stored in the ``user`` table owned by User Service."""

    id: int = field(init=False)
    email: Optional[str] = None
    firstname: Optional[str] = None
    surname: Optional[str] = None
    role: Optional[str] = None
