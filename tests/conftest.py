import asyncio

import pytest
from fastapi.testclient import TestClient

from shared.storage import JsonFileStore
from services.school_directory.backends.local import LocalBackend
from services.school_directory.context import Directory
from services.school_directory.store import DataStore

ADMIN_EMAIL = "adminsakura@gmail.com"
ADMIN_PASSWORD = "Sakura123"
MEMBER_EMAIL = "kenji.tanaka@example.com"
MEMBER_PASSWORD = "password123"


@pytest.fixture
def storage(tmp_path):
    return JsonFileStore(tmp_path / "storage")


@pytest.fixture
def local_backend(storage):
    return LocalBackend(storage.namespace("collections"))


@pytest.fixture
async def data(local_backend):
    store = DataStore(local_backend)
    await store.load()
    return store


@pytest.fixture
def directory(storage, local_backend):
    store = DataStore(local_backend)
    asyncio.run(store.load())
    return Directory(store, storage)


@pytest.fixture
def client(directory):
    from main import app

    app.state.directory = directory
    return TestClient(app)


def login(client, email, password, headers=None):
    response = client.post("/auth/login", json={"email": email, "password": password}, headers=headers or {})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def member_headers(client):
    return login(client, MEMBER_EMAIL, MEMBER_PASSWORD)
