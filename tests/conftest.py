"""Shared pytest fixtures and an in-memory stand-in for the MongoDB database."""

import copy
from collections.abc import Iterator
from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from foodgarden.app import App
from foodgarden.config import Config
from foodgarden.web.server import create_fastapi_app

TEST_SECRET = "api-test-secret-0123456789abcdef"  # noqa: S105


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]], error: Exception | None = None) -> None:
        self._docs = docs
        self._error = error

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._docs = sorted(self._docs, key=lambda d: (d.get(key) is None, d.get(key)), reverse=direction == -1)
        return self

    async def __aiter__(self):  # noqa: ANN204
        if self._error is not None:
            raise self._error
        for doc in self._docs:
            yield copy.deepcopy(doc)


class FakeCollection:
    """Implements the subset of AsyncCollection used by the services."""

    def __init__(self) -> None:
        self.docs: list[dict[str, Any]] = []
        self.fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def create_index(self, *args: Any, **kwargs: Any) -> str:
        return "index"

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        docs = [doc for doc in self.docs if _matches(doc, query or {})]
        return FakeCursor(docs, self.fail_with)

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, doc: dict[str, Any]) -> SimpleNamespace:
        self._check()
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def update_one(self, query: dict[str, Any], update: dict[str, Any]) -> SimpleNamespace:
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                before = copy.deepcopy(doc)
                for key, value in update.get("$set", {}).items():
                    doc[key] = copy.deepcopy(value)
                for key, value in update.get("$push", {}).items():
                    doc.setdefault(key, []).append(copy.deepcopy(value))
                return SimpleNamespace(matched_count=1, modified_count=int(doc != before))
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def find_one_and_update(
        self, query: dict[str, Any], update: dict[str, Any], return_document: bool = ReturnDocument.BEFORE
    ) -> dict[str, Any] | None:
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                before = copy.deepcopy(doc)
                for key, value in update.get("$set", {}).items():
                    doc[key] = copy.deepcopy(value)
                return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def delete_one(self, query: dict[str, Any]) -> SimpleNamespace:
        self._check()
        for index, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    def __init__(self, name: str = "foodsdb_test") -> None:
        self.name = name
        self.ping_error: PyMongoError | None = None
        self._collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self._collections.setdefault(name, FakeCollection())

    async def command(self, command: str) -> dict[str, Any]:
        if self.ping_error is not None:
            raise self.ping_error
        return {"ok": 1.0}


@pytest.fixture
def config():
    """Development-mode configuration (non-secure cookies over plain HTTP)."""
    return Config(
        database_url="mongodb://localhost:27017/foodsdb_test",
        jwt_secret=TEST_SECRET,
        production=False,
        cors_origins=["http://localhost:5173"],
        _env_file=None,
    )


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
def foods(database):
    """The raw foods collection, for asserting on stored documents."""
    return database.get_collection("foods")


@pytest.fixture
def app(config, database):
    return App(config, database)


@pytest.fixture
def client(app, config) -> Iterator[TestClient]:
    with TestClient(create_fastapi_app(app, config)) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Log the test client in as the given email via POST /jwt."""

    def _login(email: str = "u@example.com") -> None:
        response = client.post("/jwt", json={"email": email})
        assert response.status_code == 200

    return _login
