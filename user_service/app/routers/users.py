import re
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.errors import NotFoundError
from ..core.repository import Repository
from ..models.user import User
from ..schemas.user import CreateUserRequest, UpdateUserRequest, RemoveUserRequest, UserOut
from ..services.user_service import UserService

router = APIRouter()

ID_PATTERN = re.compile(r"-?[0-9]+")
MAX_ID = 2 ** 63 - 1


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(Repository(db, User))


def parse_user_id(raw_id: str) -> int:
    if not ID_PATTERN.fullmatch(raw_id) or abs(int(raw_id)) > MAX_ID:
        raise NotFoundError(f"User {raw_id} not found")
    return int(raw_id)


# Served on both /users and /users/
@router.get("", response_model=List[UserOut], include_in_schema=False)
@router.get("/", response_model=List[UserOut])
def list_users(service: UserService = Depends(get_user_service)):
    return [UserOut.model_validate(user) for user in service.find_all()]


@router.post("", response_model=UserOut, include_in_schema=False)
@router.post("/", response_model=UserOut)
def create_user(user_in: CreateUserRequest, service: UserService = Depends(get_user_service)):
    return UserOut.model_validate(service.create(user_in))


@router.put("", response_model=UserOut, include_in_schema=False)
@router.put("/", response_model=UserOut)
def update_user(user_in: UpdateUserRequest, service: UserService = Depends(get_user_service)):
    return UserOut.model_validate(service.update(user_in))


@router.delete("", response_model=UserOut, include_in_schema=False)
@router.delete("/", response_model=UserOut)
def delete_user(user_in: RemoveUserRequest, service: UserService = Depends(get_user_service)):
    return UserOut.model_validate(service.remove(user_in))


@router.get("/findById/{user_id}", response_model=UserOut)
def find_user_by_id(user_id: str, service: UserService = Depends(get_user_service)):
    return UserOut.model_validate(service.find_by_id(parse_user_id(user_id)))


@router.get("/findByName/{name}", response_model=UserOut)
def find_user_by_name(name: str, service: UserService = Depends(get_user_service)):
    return UserOut.model_validate(service.find_by_name(name))
