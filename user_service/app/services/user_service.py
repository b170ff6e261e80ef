import logging
from typing import List

from ..core.errors import NotFoundError
from ..core.repository import Repository
from ..models.user import User
from ..schemas.user import CreateUserRequest, UpdateUserRequest, RemoveUserRequest

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("email", "firstname", "surname", "role")


class UserService:
    def __init__(self, users: Repository[User]):
        self.users = users

    def find_all(self) -> List[User]:
        return self.users.find_all()

    def find_by_id(self, user_id: int) -> User:
        user = self.users.find_one(User.id == user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def find_by_name(self, name: str) -> User:
        """Users are named by their first name."""
        user = self.users.find_one(User.firstname == name)
        if user is None:
            raise NotFoundError(f"User named '{name}' not found")
        return user

    def create(self, request: CreateUserRequest) -> User:
        user = self.users.save(User(**request.model_dump()))
        logger.info(f"Created user {user.id}")
        return user

    def update(self, request: UpdateUserRequest) -> User:
        user = self.find_by_id(request.id)
        for field, value in request.model_dump(exclude_unset=True).items():
            if field in UPDATABLE_FIELDS:
                setattr(user, field, value)
        user = self.users.save(user)
        logger.info(f"Updated user {user.id}")
        return user

    def remove(self, request: RemoveUserRequest) -> User:
        user = self.find_by_id(request.id)
        self.users.remove(user)
        logger.info(f"Removed user {request.id}")
        return user
