# tests/conftest.py
from pathlib import Path
from typing import Callable, Dict, Tuple

import pytest
from fastapi.testclient import TestClient

from taskboard.app import create_app
from taskboard.config import Settings
from taskboard.core.auth_service import AuthService
from taskboard.core.project_service import ProjectService
from taskboard.core.security import TokenSigner
from taskboard.core.task_service import TaskService
from taskboard.db import MemoryStore

TEST_SECRET = "test-secret-key"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    # Lowest bcrypt cost keeps the suite fast.
    return Settings(
        data_path=tmp_path / "storage.json",
        secret_key=TEST_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def signer() -> TokenSigner:
    return TokenSigner(TEST_SECRET)


@pytest.fixture()
def auth_service(store: MemoryStore, signer: TokenSigner) -> AuthService:
    return AuthService(store, signer, bcrypt_rounds=4)


@pytest.fixture()
def project_service(store: MemoryStore) -> ProjectService:
    return ProjectService(store)


@pytest.fixture()
def task_service(store: MemoryStore) -> TaskService:
    return TaskService(store)


@pytest.fixture()
def client(settings: Settings, store: MemoryStore) -> TestClient:
    return TestClient(create_app(settings=settings, store=store))


@pytest.fixture()
def signup(client: TestClient) -> Callable[..., Tuple[Dict[str, str], Dict[str, str]]]:
    """Register a user through the API; returns (user, auth headers)."""

    def _signup(email: str = "a@x.com", password: str = "pw123456", name: str = "Alice"):
        resp = client.post("/auth/signup", json={"email": email, "name": name, "password": password})
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _signup
