from typing import Any, Dict, Iterable, List, Optional

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from app.api.deps import (
    get_business_executor,
    get_owner_business_executor,
    get_owner_product_repository,
    get_product_repository,
    require_identity,
)
from app.core.config import settings
from app.main import app
from app.repositories.business_repo import ExecutionResult
from app.services.token_service import create_access_token
from app.services.update_builder import UpdateStatement


class InMemoryBusinessStore:
    """Ejecutor en memoria con contadores de llamadas (sustituye a Mongo en tests)."""

    def __init__(self, docs: Iterable[Dict[str, Any]] = ()) -> None:
        self.docs: List[Dict[str, Any]] = [dict(d) for d in docs]
        self.update_calls: List[UpdateStatement] = []
        self.find_calls: List[str] = []
        self.fail_with: Optional[Exception] = None

    @property
    def call_count(self) -> int:
        return len(self.update_calls) + len(self.find_calls)

    @staticmethod
    def _matches(doc: Dict[str, Any], predicate: Dict[str, Any]) -> bool:
        return all(doc.get(k) == v for k, v in predicate.items())

    def execute_update(self, statement: UpdateStatement) -> ExecutionResult:
        self.update_calls.append(statement)
        if self.fail_with is not None:
            raise self.fail_with
        matched = [d for d in self.docs if self._matches(d, statement.predicate)]
        for doc in matched:
            doc.update(statement.to_update_document()["$set"])
        record = dict(matched[0]) if len(matched) == 1 else None
        return ExecutionResult(rows_affected=len(matched), record=record)

    def find_by_owner(self, owner_id: str, limit: int = 0) -> List[Dict[str, Any]]:
        self.find_calls.append(owner_id)
        if self.fail_with is not None:
            raise self.fail_with
        found = [dict(d) for d in self.docs if d.get("owner_id") == owner_id]
        return found[:limit] if limit else found

    def get(self, business_id: str) -> Dict[str, Any]:
        return next(d for d in self.docs if d["id"] == business_id)


class InMemoryProductStore:
    """Repositorio de productos en memoria; conserva el orden de inserción."""

    def __init__(self) -> None:
        self.docs: List[Dict[str, Any]] = []
        self.insert_calls: List[Dict[str, Any]] = []

    def insert_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self.insert_calls.append(dict(data))
        doc = dict(data)
        doc.setdefault("id", f"P{len(self.docs) + 1}")
        doc.setdefault("created_at", f"2024-01-01T00:00:{len(self.docs):02d}+00:00")
        self.docs.append(doc)
        return dict(doc)

    def list_products(self) -> List[Dict[str, Any]]:
        return [dict(d) for d in reversed(self.docs)]


@pytest.fixture(autouse=True)
def _jwt_secret(monkeypatch):
    monkeypatch.setattr(settings, "jwt_secret", "test-secret")


@pytest.fixture()
def store():
    return InMemoryBusinessStore([
        {
            "id": "B1",
            "owner_id": "u1",
            "name": "Panadería Sol",
            "tagline": "old",
            "website": "https://sol.example",
            "founded_year": 1999,
        },
        {
            "id": "B2",
            "owner_id": "u2",
            "name": "Taller Norte",
            "tagline": "fierros",
        },
    ])


@pytest.fixture()
def products():
    return InMemoryProductStore()


@pytest.fixture()
def client(store, products):
    # Las variantes "owner" conservan la exigencia de identidad antes de tocar el store
    def _owner_store(identity=Depends(require_identity)):
        return store

    def _owner_products(identity=Depends(require_identity)):
        return products

    app.dependency_overrides[get_business_executor] = lambda: store
    app.dependency_overrides[get_owner_business_executor] = _owner_store
    app.dependency_overrides[get_product_repository] = lambda: products
    app.dependency_overrides[get_owner_product_repository] = _owner_products
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    def _headers(user_id: str = "u1") -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id=user_id)}"}
    return _headers
