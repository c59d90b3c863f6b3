"""Shared fixtures: an in-memory stand-in for the Firestore client."""

from __future__ import annotations

import copy
from typing import Any, Callable

import pytest

from integrations.firestore import DOCUMENT_ID, FirestoreError


class FakeFirestore:
    """Serves documents from dicts and records every call.

    *fail* is a predicate over ``(method, collection, kwargs)``; when it
    returns True the call raises :class:`FirestoreError`.
    """

    def __init__(
        self,
        collections: dict[str, list[dict[str, Any]]] | None = None,
        fail: Callable[[str, str, dict[str, Any]], bool] | None = None,
    ) -> None:
        self.collections = collections or {}
        self.fail = fail or (lambda method, collection, kwargs: False)
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def _check(self, method: str, collection: str, **kwargs: Any) -> None:
        self.calls.append((method, collection, kwargs))
        if self.fail(method, collection, kwargs):
            raise FirestoreError(f"{method} {collection} failed")

    @staticmethod
    def _matches(doc: dict[str, Any], field: str, op: str, value: Any) -> bool:
        actual = doc.get("id") if field == DOCUMENT_ID else doc.get(field)
        if op == "==":
            return actual == value
        if op == "in":
            return actual in value
        raise AssertionError(f"operator {op} not supported by the fake")

    async def get_document(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        self._check("get_document", collection, doc_id=doc_id)
        for doc in self.collections.get(collection, []):
            if doc["id"] == doc_id:
                return copy.deepcopy(doc)
        return None

    async def get_documents(self, collection: str, ids: list[str]) -> list[dict[str, Any]]:
        self._check("get_documents", collection, ids=ids)
        by_id = {d["id"]: d for d in self.collections.get(collection, [])}
        return [copy.deepcopy(by_id[i]) for i in ids if i in by_id]

    async def query(
        self,
        collection: str,
        filters: list[tuple[str, str, Any]] | None = None,
        order_by: list[tuple[str, str]] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        self._check("query", collection, filters=filters, order_by=order_by, limit=limit)
        docs = [
            d for d in self.collections.get(collection, [])
            if all(self._matches(d, *f) for f in (filters or []))
        ]
        for field, direction in reversed(order_by or []):
            docs.sort(key=lambda d: d.get(field), reverse=direction == "desc")
        if limit is not None:
            docs = docs[:limit]
        return copy.deepcopy(docs)

    def count(self, method: str, collection: str | None = None) -> int:
        return sum(
            1 for m, c, _ in self.calls
            if m == method and (collection is None or c == collection)
        )


@pytest.fixture
def make_fake() -> Callable[..., FakeFirestore]:
    return FakeFirestore
