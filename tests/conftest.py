"""Pytest fixtures for weight trend tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from models.weight_log import WeightSample

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed 'current time' for deterministic predictions."""
    return NOW


@pytest.fixture
def make_history(now):
    """
    Build a weight history from (days_ago, weight_kg) pairs.

    Offsets are relative to the `now` fixture, so (0, 80.0) is a
    measurement taken at the moment of prediction.
    """

    def _make(points: list[tuple[float, float]]) -> list[WeightSample]:
        return [
            WeightSample(timestamp=now - timedelta(days=days_ago), weight_kg=weight)
            for days_ago, weight in points
        ]

    return _make


class FakeDocument:
    """Stand-in for a Firestore DocumentSnapshot."""

    def __init__(self, doc_id: str, data: dict):
        self.id = doc_id
        self._data = data

    def to_dict(self) -> dict:
        return dict(self._data)


class FakeQuery:
    """
    Just enough of the Firestore async query API for the service. Like the
    real thing, ordering, cursor and limit are applied together on get().
    """

    def __init__(
        self,
        docs: list[FakeDocument],
        order: tuple[str, str] | None = None,
        cursor: FakeDocument | None = None,
        count: int | None = None,
    ):
        self._docs = list(docs)
        self._order = order
        self._cursor = cursor
        self._count = count

    def _copy(self, **changes) -> FakeQuery:
        state = {"order": self._order, "cursor": self._cursor, "count": self._count}
        state.update(changes)
        return FakeQuery(self._docs, **state)

    def order_by(self, field: str, direction: str = "ASCENDING") -> FakeQuery:
        return self._copy(order=(field, direction))

    def limit(self, count: int) -> FakeQuery:
        return self._copy(count=count)

    def start_after(self, cursor: FakeDocument) -> FakeQuery:
        return self._copy(cursor=cursor)

    async def get(self) -> list[FakeDocument]:
        docs = list(self._docs)
        if self._order is not None:
            field, direction = self._order
            if field == "__name__":
                key = lambda doc: doc.id  # noqa: E731
            else:
                key = lambda doc: doc.to_dict()[field]  # noqa: E731
            docs.sort(key=key, reverse=direction == "DESCENDING")
        if self._cursor is not None:
            ids = [doc.id for doc in docs]
            docs = docs[ids.index(self._cursor.id) + 1 :]
        if self._count is not None:
            docs = docs[: self._count]
        return docs


class FakeCollection(FakeQuery):
    def __init__(self, docs: list[FakeDocument], subcollections: dict):
        super().__init__(docs)
        self._subcollections = subcollections

    def document(self, doc_id: str) -> FakeDocumentRef:
        return FakeDocumentRef(self._subcollections.get(doc_id, {}))


class FakeDocumentRef:
    def __init__(self, collections: dict):
        self._collections = collections

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self._collections.get(name, []), {})


class FakeFirestoreClient:
    """
    In-memory Firestore holding a 'users' collection and, per user,
    a 'weightLogs' subcollection.
    """

    def __init__(self):
        self.users: list[FakeDocument] = []
        self.weight_logs: dict[str, dict[str, list[FakeDocument]]] = {}

    def add_user(self, uid: str, data: dict) -> None:
        self.users.append(FakeDocument(uid, data))

    def add_weight_log(self, uid: str, doc_id: str, data: dict) -> None:
        logs = self.weight_logs.setdefault(uid, {}).setdefault("weightLogs", [])
        logs.append(FakeDocument(doc_id, data))

    def collection(self, name: str) -> FakeCollection:
        if name != "users":
            return FakeCollection([], {})
        return FakeCollection(self.users, self.weight_logs)


@pytest.fixture
def fake_db() -> FakeFirestoreClient:
    return FakeFirestoreClient()
