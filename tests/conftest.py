import pytest
from fastapi.testclient import TestClient

from task_service.app.core.config import Settings as TaskSettings
from task_service.app.main import create_app as create_task_app
from user_service.app.core.config import Settings as UserSettings
from user_service.app.main import create_app as create_user_app


@pytest.fixture
def task_app():
    return create_task_app(TaskSettings(database_url="sqlite://", log_level="DEBUG"))


@pytest.fixture
def task_client(task_app):
    with TestClient(task_app) as client:
        yield client


@pytest.fixture
def user_app():
    return create_user_app(UserSettings(DATABASE_URL="sqlite://", LOG_LEVEL="DEBUG"))


@pytest.fixture
def user_client(user_app):
    with TestClient(user_app) as client:
        yield client


@pytest.fixture
def dishes():
    return {
        "name": "Do the dishes",
        "content": "Wash all dishes",
        "status": "In Progress",
        "deadline": "2024-12-31T23:59:59Z",
    }
