from typing import Optional
from pydantic import BaseModel, ConfigDict


class CreateUserRequest(BaseModel):
    email: Optional[str] = None
    firstname: Optional[str] = None
    surname: Optional[str] = None
    role: Optional[str] = None


class UpdateUserRequest(BaseModel):
    id: int
    email: Optional[str] = None
    firstname: Optional[str] = None
    surname: Optional[str] = None
    role: Optional[str] = None


class RemoveUserRequest(BaseModel):
    id: int


class UserOut(BaseModel):
    id: int
    email: str
    firstname: str
    surname: str
    role: str

    model_config = ConfigDict(from_attributes=True)
