"""
Shared pytest fixtures.

Firebase is never contacted: `FakeStore` stands in for the Firestore-backed
`AdminDataStore` and `FakeIdentity` for Firebase Authentication. Every test
builds its own app through `create_app(...)`, so no state leaks between tests.
"""
import copy
from typing import Any, Dict, Iterable, List, Optional

import pytest
from fastapi.testclient import TestClient

from namapp.config import Settings
from namapp.core.errors import CredentialInvalid
from namapp.integrations.sms import SMSClient
from namapp.main import create_app
from namapp.schemas.principal import Principal, UserRecord

ADMIN_TOKEN = "token-admin"
DEV_TOKEN = "token-dev"
NOROW_TOKEN = "token-norow"


class FakeIdentity:
    def __init__(self, tokens: Dict[str, str]):
        self.tokens = tokens
        self.calls: List[str] = []

    async def resolve(self, id_token: str) -> Principal:
        self.calls.append(id_token)
        uid = self.tokens.get(id_token)
        if uid is None:
            raise CredentialInvalid()
        return Principal(id=uid, email=f"{uid}@example.com")


class FakeStore:
    """
    In-memory replacement for AdminDataStore.

    `fail` names sources whose reads raise: a collection name, or
    "<collection>:<status>" for a filtered count. `role_error` makes user
    lookups raise.
    """

    def __init__(
        self,
        collections: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        roles: Optional[Dict[str, Optional[str]]] = None,
        fail: Iterable[str] = (),
        role_error: bool = False,
    ):
        self.collections = copy.deepcopy(collections or {})
        self.roles = roles or {}
        self.fail = set(fail)
        self.role_error = role_error
        self.calls: List[str] = []
        self.writes: List[tuple] = []
        self.fetched: List[str] = []

    def _check(self, source: str) -> None:
        self.calls.append(source)
        if source in self.fail:
            raise RuntimeError(f"{source} unavailable")

    async def get_user(self, uid: str) -> UserRecord:
        self.calls.append("users/" + uid)
        if self.role_error:
            raise RuntimeError("permission denied")
        return UserRecord(id=uid, role=self.roles.get(uid))

    async def fetch(self, collection: str, fields: Iterable[str]) -> List[Dict[str, Any]]:
        self._check(collection)
        self.fetched.append(collection)
        fields = list(fields)
        return [
            {"id": doc.get("id"), **{f: doc[f] for f in fields if f in doc}}
            for doc in self.collections.get(collection, [])
        ]

    async def count(self, collection: str, status: Optional[str] = None) -> int:
        docs = self.collections.get(collection, [])
        if status is None:
            self._check(collection)
            return len(docs)
        self._check(f"{collection}:{status}")
        return sum(1 for d in docs if d.get("status") == status)

    async def list_documents(self, collection: str) -> List[Dict[str, Any]]:
        self._check(collection)
        return copy.deepcopy(self.collections.get(collection, []))

    async def update_document(self, collection: str, doc_id: str, patch: Dict[str, Any]):
        self._check(collection)
        for doc in self.collections.get(collection, []):
            if doc.get("id") == doc_id:
                doc.update(patch)
                self.writes.append((collection, doc_id, dict(patch)))
                return copy.deepcopy(doc)
        return None


@pytest.fixture
def identity():
    return FakeIdentity({ADMIN_TOKEN: "admin-1", DEV_TOKEN: "dev-1", NOROW_TOKEN: "ghost-1"})


@pytest.fixture
def roles():
    return {"admin-1": "admin", "dev-1": "developer"}


@pytest.fixture
def sample_collections():
    """Known fixture data; expected totals are computed by hand in the tests."""
    return {
        "users": [{"id": "admin-1"}, {"id": "dev-1"}, {"id": "u-3"}, {"id": "u-4"}],
        "apps": [
            {"id": "a1", "status": "pending", "downloads": 10},
            {"id": "a2", "status": "approved", "downloads": 25},
            {"id": "a3", "status": "pending"},
        ],
        "products": [
            {"id": "p1", "status": "pending"},
            {"id": "p2", "status": "approved"},
        ],
        "orders": [
            {"id": "o1", "status": "pending", "total_amount": 100, "created_at": "2026-01-01T10:00:00Z"},
            {"id": "o2", "status": "shipped", "total_amount": "bad", "created_at": "2026-03-01T10:00:00Z"},
            {"id": "o3", "status": "pending", "total_amount": 50, "created_at": "2026-02-01T10:00:00Z"},
        ],
        "product_ratings": [{"id": "r1", "rating": 5}, {"id": "r2", "rating": 4}, {"id": "r3", "rating": 3}],
        "contact_messages": [
            {"id": "c1", "status": "new"},
            {"id": "c2", "status": "read"},
            {"id": "c3", "status": "new"},
        ],
        "driving_school_packages": [{"id": "k1"}, {"id": "k2"}],
        "driving_school_bookings": [
            {"id": "b1", "status": "pending"},
            {"id": "b2", "status": "confirmed"},
            {"id": "b3", "status": "pending"},
            {"id": "b4", "status": "cancelled"},
        ],
    }


@pytest.fixture
def store(sample_collections, roles):
    return FakeStore(sample_collections, roles)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        twilio_account_sid="AC0123456789abcdef",
        twilio_auth_token="secret-token-value",
        twilio_from_number="+15550001111",
        twilio_messaging_service_sid="",
    )


@pytest.fixture
def make_client(settings, identity):
    """Builds a TestClient around a fresh app with the given collaborators."""

    def _make(store: FakeStore, sms: Optional[SMSClient] = None) -> TestClient:
        app = create_app(
            settings=settings,
            datastore=store,
            identity=identity,
            sms=sms or SMSClient(settings),
        )
        return TestClient(app)

    return _make


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
