from dataclasses import dataclass, field
from typing import Optional


@dataclass
class User:
    id: int = field(init=False)
    email: Optional[str] = None
    firstname: Optional[str] = None
    surname: Optional[str] = None
    role: Optional[str] = None

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
