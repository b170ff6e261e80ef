"""
Pydantic schemas for Task Service.
"""
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class TaskUser(BaseModel):
    """Task assignee as sent and returned by the API"""
    id: int = Field(..., description="User ID")
    email: Optional[str] = Field(None, description="User email")
    firstname: Optional[str] = Field(None, description="User first name")
    surname: Optional[str] = Field(None, description="User surname")
    role: Optional[str] = Field(None, description="User role")

    model_config = ConfigDict(from_attributes=True)


class CreateTaskRequest(BaseModel):
    """Schema for creating a task; missing columns are rejected by the database"""
    name: Optional[str] = Field(None, description="Task name", examples=["Do the dishes"])
    content: Optional[str] = Field(None, description="Task content", examples=["Wash all the dishes in the sink"])
    status: Optional[str] = Field(None, description="Task status", examples=["In Progress"])
    deadline: Optional[str] = Field(None, description="Task deadline", examples=["2024-12-31T23:59:59Z"])
    users: Optional[List[TaskUser]] = Field(None, description="Assigned users, matched by id")


class UpdateTaskRequest(BaseModel):
    """Schema for updating a task; only the fields sent are changed"""
    id: int = Field(..., description="Task ID")
    name: Optional[str] = Field(None, description="Task name")
    content: Optional[str] = Field(None, description="Task content")
    status: Optional[str] = Field(None, description="Task status")
    deadline: Optional[str] = Field(None, description="Task deadline")
    users: Optional[List[TaskUser]] = Field(None, description="Replacement list of assigned users")


class RemoveTaskRequest(BaseModel):
    """Schema for deleting a task"""
    id: int = Field(..., description="Task ID")


class TaskResponse(BaseModel):
    """Schema for task response"""
    id: int = Field(..., description="Task ID", examples=[1])
    name: str = Field(..., description="Task name")
    content: str = Field(..., description="Task content")
    status: str = Field(..., description="Task status")
    deadline: str = Field(..., description="Task deadline")
    users: Optional[List[TaskUser]] = Field(None, description="Assigned users, present when loaded")
