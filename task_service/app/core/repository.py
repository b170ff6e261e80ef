"""
Generic repository over a SQLAlchemy session.
"""
import logging
from typing import Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import PersistenceError

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")


class Repository(Generic[EntityT]):
    """
    Find, save and remove operations for one mapped entity type.

    Every SQLAlchemy failure is rolled back and re-raised as
    ``PersistenceError``.
    """

    def __init__(self, session: Session, entity: Type[EntityT]):
        self.session = session
        self.entity = entity

    def find_all(self) -> List[EntityT]:
        try:
            return list(self.session.scalars(select(self.entity)).all())
        except SQLAlchemyError as e:
            self._fail("find_all", e)

    def find_one(self, *criteria, options: Sequence = ()) -> Optional[EntityT]:
        """Return the first row matching ``criteria``, or None."""
        stmt = select(self.entity).where(*criteria).options(*options).limit(1)
        try:
            return self.session.scalars(stmt).first()
        except SQLAlchemyError as e:
            self._fail("find_one", e)

    def find_by_ids(self, ids: Iterable[int]) -> List[EntityT]:
        ids = list(ids)
        if not ids:
            return []
        stmt = select(self.entity).where(self.entity.id.in_(ids))
        try:
            return list(self.session.scalars(stmt).all())
        except SQLAlchemyError as e:
            self._fail("find_by_ids", e)

    def save(self, entity: EntityT) -> EntityT:
        try:
            self.session.add(entity)
            self.session.commit()
            self.session.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            self._fail("save", e)

    def remove(self, entity: EntityT) -> EntityT:
        try:
            self.session.delete(entity)
            self.session.commit()
            return entity
        except SQLAlchemyError as e:
            self._fail("remove", e)

    def _fail(self, operation: str, error: SQLAlchemyError):
        self.session.rollback()
        logger.error(f"{self.entity.__name__} {operation} failed: {error}")
        raise PersistenceError(
            f"Error in {self.entity.__name__.lower()} {operation}: {error}"
        ) from error
