"""
Table layout and ORM mapping for Task Service entities.

The entities in this package are plain dataclasses; this module declares the
tables they live in and maps them imperatively. The table and column names
match the schema shared with User Service.
"""
from sqlalchemy import Column, ForeignKey, Integer, MetaData, String, Table, inspect
from sqlalchemy.orm import registry, relationship

from .task import Task
from .user import User

metadata = MetaData()
mapper_registry = registry(metadata=metadata)

user_table = Table(
    "user",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("email", String(255), nullable=False),
    Column("firstname", String(255), nullable=False),
    Column("surname", String(255), nullable=False),
    Column("role", String(255), nullable=False),
)

task_table = Table(
    "task",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("content", String(255), nullable=False),
    Column("status", String(255), nullable=False),
    Column("deadline", String(255), nullable=False),
)

# Assignees; rows carry no attributes of their own
task_users_table = Table(
    "task_users_user",
    metadata,
    Column("taskId", Integer, ForeignKey("task.id", ondelete="CASCADE"), primary_key=True, index=True),
    Column("userId", Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True, index=True),
)


def map_entities() -> None:
    """Map the entity classes onto their tables. Safe to call more than once."""
    if inspect(Task, raiseerr=False) is not None:
        return

    mapper_registry.map_imperatively(User, user_table)
    mapper_registry.map_imperatively(
        Task,
        task_table,
        properties={
            # Loaded only when a query asks for it
            "users": relationship(User, secondary=task_users_table, lazy="select"),
        },
    )
