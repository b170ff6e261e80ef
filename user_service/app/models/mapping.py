"""
Table layout and ORM mapping for the User entity.
"""
from sqlalchemy import Column, Integer, MetaData, String, Table, inspect
from sqlalchemy.orm import registry

from .user import User

metadata = MetaData()
mapper_registry = registry(metadata=metadata)

# Shared with Task Service, which joins assignees against it
user_table = Table(
    "user",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("email", String(255), nullable=False),
    Column("firstname", String(255), nullable=False),
    Column("surname", String(255), nullable=False),
    Column("role", String(255), nullable=False),
)


def map_entities() -> None:
    if inspect(User, raiseerr=False) is None:
        mapper_registry.map_imperatively(User, user_table)
