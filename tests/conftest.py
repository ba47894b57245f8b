import secrets

import pytest
from fastapi.testclient import TestClient

from portal.main import app
from portal.api import deps
from portal.core.errors import NotFoundError
from portal.db.postgres import create_db_engine, init_schema
from portal.db.store import Store
from portal.services.file_storage import FileStorage, StoredFile
from portal.services.task_queue import InlineTaskQueue


class MemoryFileStorage(FileStorage):
    """Keeps upload targets and files in dicts."""

    def __init__(self):
        super().__init__(base_url="http://testserver")
        self.targets = {}
        self.files = {}

    def create_upload_target(self, user_id):
        token = secrets.token_urlsafe(8)
        self.targets[token] = user_id
        return token

    def store(self, token, data, filename, content_type):
        if token not in self.targets:
            raise NotFoundError("Upload target not found or already used")
        del self.targets[token]
        storage_id = secrets.token_hex(12)
        self.files[storage_id] = StoredFile(storage_id, filename, content_type, data)
        return storage_id

    def exists(self, storage_id):
        return storage_id in self.files

    def open(self, storage_id):
        if storage_id not in self.files:
            raise NotFoundError("File not found")
        return self.files[storage_id]


class StubCompletionClient:
    """Returns a canned reply, or raises `error` when set."""

    def __init__(self, reply="Here is some help."):
        self.reply = reply
        self.error = None
        self.calls = []

    def complete(self, system_prompt, history):
        self.calls.append({"system_prompt": system_prompt, "history": list(history)})
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture()
def store():
    engine = create_db_engine("sqlite://")
    init_schema(engine)
    yield Store(engine)
    engine.dispose()


@pytest.fixture()
def file_storage():
    return MemoryFileStorage()


@pytest.fixture()
def completion():
    return StubCompletionClient()


@pytest.fixture()
def task_queue():
    return InlineTaskQueue()


@pytest.fixture()
def client(store, file_storage, completion, task_queue):
    app.dependency_overrides[deps.get_store] = lambda: store
    app.dependency_overrides[deps.get_file_storage] = lambda: file_storage
    app.dependency_overrides[deps.get_completion] = lambda: completion
    app.dependency_overrides[deps.get_task_queue] = lambda: task_queue
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(client):
    """Register + login; returns auth headers."""
    def _make(email="student@example.com", password="secret123"):
        resp = client.post("/api/auth/register", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.text
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
    return _make


@pytest.fixture()
def make_student(client, make_user):
    """Account with a profile; returns auth headers."""
    def _make(email="student@example.com", branch="Computer Science and Engineering", semester=5, usn="1ab21cs001"):
        headers = make_user(email)
        resp = client.put("/api/students/me", headers=headers, json={
            "usn": usn,
            "name": "Test Student",
            "branch": branch,
            "semester": semester,
            "batch": "2021-25"
        })
        assert resp.status_code == 200, resp.text
        return headers
    return _make
