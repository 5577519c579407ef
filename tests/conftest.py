"""Shared fixtures: an in-memory Firestore stand-in and a scripted insights client."""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Optional

import pytest
from google.api_core import exceptions as gcp_exceptions


class FakeDocumentSnapshot:
    def __init__(self, doc_id: str, data: Dict[str, Any]) -> None:
        self.id = doc_id
        self._data = data

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)


class FakeDocumentReference:
    def __init__(self, collection: str, doc_id: str) -> None:
        self.collection = collection
        self.id = doc_id


class FakeCollection:
    def __init__(self, db: "FakeFirestore", name: str) -> None:
        self._db = db
        self.name = name

    def stream(self):
        self._db.stream_calls.append(self.name)
        if self.name in self._db.fail_reads:
            raise gcp_exceptions.ServiceUnavailable(f"read of {self.name} failed")
        docs = self._db.data.get(self.name, {})
        return iter([FakeDocumentSnapshot(doc_id, data) for doc_id, data in docs.items()])

    def document(self, doc_id: str) -> FakeDocumentReference:
        return FakeDocumentReference(self.name, doc_id)


class FakeWriteBatch:
    def __init__(self, db: "FakeFirestore") -> None:
        self._db = db
        self.sets: List[tuple] = []
        self.committed = False

    def set(self, ref: FakeDocumentReference, data: Dict[str, Any]) -> None:
        self.sets.append((ref, copy.deepcopy(data)))

    def commit(self) -> None:
        if self._db.fail_commit:
            raise gcp_exceptions.Aborted("commit failed")
        # Full replace, applied all together
        for ref, data in self.sets:
            self._db.data.setdefault(ref.collection, {})[ref.id] = data
        self.committed = True


class FakeFirestore:
    """Just enough of google.cloud.firestore.Client for the workflow."""

    def __init__(self, data: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None) -> None:
        self.data = data or {}
        self.batches: List[FakeWriteBatch] = []
        self.stream_calls: List[str] = []
        self.fail_commit = False
        self.fail_reads: set = set()

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)

    def batch(self) -> FakeWriteBatch:
        batch = FakeWriteBatch(self)
        self.batches.append(batch)
        return batch


class FakeInsightClient:
    """Records every call; replies with `reply(journals_json)`."""

    def __init__(self, reply: Optional[Callable[[str], str]] = None) -> None:
        self.calls: List[str] = []
        self._reply = reply or (lambda journals_json: "['Insight 1', 'Insight 2', 'Insight 3']")
        self.closed = False

    def fetch_insights(self, journals_json: str) -> str:
        self.calls.append(journals_json)
        return self._reply(journals_json)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_db() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
def fake_client() -> FakeInsightClient:
    return FakeInsightClient()


@pytest.fixture
def two_user_db() -> FakeFirestore:
    """u1 has one journal entry, u2 has none."""
    return FakeFirestore({
        "app_users": {
            "a": {"uid": "u1", "name": "Ada"},
            "b": {"uid": "u2", "name": "Bo"},
        },
        "user_journals": {
            "j1": {"uid": "u1", "moodToday": "ok", "rememberThisDayBy": "coffee", "challenges": "none"},
        },
    })
