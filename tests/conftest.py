"""Shared fixtures: an app wired to a throwaway SQLite database."""

import pytest

from platform_backend.config import TestingConfig
from platform_backend.database import Database, SQLiteDatabase
from platform_backend.errors import StoreError
from platform_backend.server import create_app


class FailingDatabase(Database):
    """Test double whose every statement fails like an unreachable server."""

    dialect = "failing"

    def __init__(self, message: str = "connection refused") -> None:
        self.message = message
        self.statements: list[str] = []

    def query(self, sql: str, params=()) -> list:
        self.statements.append(sql)
        raise StoreError(self.message)

    def add_column_if_missing(self, table: str, column: str, ddl_type: str) -> None:
        raise StoreError(self.message)


@pytest.fixture
def database(tmp_path):
    db = SQLiteDatabase(str(tmp_path / "platform.db"))
    yield db
    db.close()


@pytest.fixture
def app(database):
    return create_app(TestingConfig(), database=database)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_article(client):
    def _make(**fields) -> dict:
        body = {"title": "Flood warning", "category": "News", "content": "Rivers are rising."}
        body.update(fields)
        response = client.post("/api/articles", json=body)
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    return _make


@pytest.fixture
def make_published_article(client, make_article):
    def _make(**fields) -> dict:
        article = make_article(**fields)
        response = client.patch(f"/api/admin/articles/{article['id']}/approve", json={})
        assert response.status_code == 200
        return response.get_json()

    return _make


@pytest.fixture
def make_ad(client):
    def _make(**fields) -> dict:
        body = {"clientName": "Acme Bakery", "email": "ads@acme.example", "plan": "weekly", "amount": 5000}
        body.update(fields)
        response = client.post("/api/ads", json=body)
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    return _make
