"""
Pytest fixtures: every test gets its own in-memory database.
"""

import pytest
from fastapi.testclient import TestClient

from student_api.core.database import init_storage
from student_api.main import create_app
from student_api.services.student.store import StudentStore


@pytest.fixture
def store():
    """Record store over a fresh in-memory database"""
    engine = init_storage(":memory:")
    store = StudentStore(engine)
    yield store
    store.close()


@pytest.fixture
def client(store):
    """HTTP client bound to an app serving the isolated store"""
    return TestClient(create_app(store))


@pytest.fixture
def ada():
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "linkedin_profile": "",
        "phone": "",
    }
