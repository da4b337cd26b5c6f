from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import DESCENDING, ReturnDocument

from app.core.config import Settings
from app.main import create_app


class FakeCursor:
    def __init__(self, docs):
        self._docs = list(docs)

    def sort(self, key, direction=1):
        self._docs.sort(key=lambda d: d.get(key), reverse=direction == DESCENDING)
        return self

    async def to_list(self, length=None):
        return [dict(d) for d in self._docs]


class FakeCollection:
    """Just enough of an AsyncIOMotorCollection for the services."""

    def __init__(self, name):
        self.name = name
        self.docs = []
        self.fail_with = None
        self.indexes = {}
        self.index_failures = {}
        self.aggregate_result = []

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    def _match(self, query):
        return [d for d in self.docs if all(d.get(k) == v for k, v in query.items())]

    async def insert_one(self, doc):
        self._maybe_fail()
        doc.setdefault("_id", ObjectId())
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=doc["_id"], acknowledged=True)

    async def find_one_and_update(self, query, update, upsert=False,
                                  return_document=ReturnDocument.BEFORE):
        self._maybe_fail()
        matches = self._match(query)
        if matches:
            doc = matches[0]
            before = dict(doc)
        elif upsert:
            doc = {"_id": ObjectId(), **query, **update.get("$setOnInsert", {})}
            self.docs.append(doc)
            before = None
        else:
            return None

        doc.update(update.get("$set", {}))
        return dict(doc) if return_document == ReturnDocument.AFTER else before

    def find(self, query=None):
        self._maybe_fail()
        return FakeCursor(self._match(query or {}))

    async def create_index(self, keys, **kwargs):
        name = kwargs.get("name")
        if name in self.index_failures:
            raise self.index_failures[name]
        self.indexes[name] = {"key": keys, **kwargs}
        return name

    async def index_information(self):
        return {"_id_": {"key": [("_id", 1)]}, **self.indexes}

    def aggregate(self, pipeline):
        self.last_pipeline = pipeline
        return FakeCursor(self.aggregate_result)


class FakeStore:
    def __init__(self):
        self.users = FakeCollection("users")
        self.payments = FakeCollection("payments")
        self.healthy = True
        self.connected = False
        self.closed = False

    async def connect(self):
        self.connected = True

    async def check_health(self):
        return self.healthy

    def close(self):
        self.closed = True


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        MONGO_URL="mongodb://localhost:27017",
        ENVIRONMENT="development",
    )


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def client(store, test_settings):
    app = create_app(store=store, config=test_settings)
    return TestClient(app)


@pytest.fixture
def payment_body():
    return {
        "name": "Asha",
        "phone": "555-0100",
        "planTitle": "Premium Love Panel",
        "amount": 11000,
        "screenshotBase64": "iVBORw0KGgoAAAANSUhEUgAAAAEAAAAB",
    }
