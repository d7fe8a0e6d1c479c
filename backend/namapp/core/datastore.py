# namapp/core/datastore.py
"""
Privileged access to the Firestore record store.

`AdminDataStore` wraps the Admin SDK's async Firestore client. Admin SDK
credentials bypass Firestore security rules, so the store is only ever handed
out by the admin gate (see `namapp.core.auth`). One instance is built at
startup and shared; it holds no per-request state.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import firebase_admin
from google.api_core import exceptions as gexc
from firebase_admin import firestore_async
from google.cloud.firestore_v1.base_query import FieldFilter

from namapp.schemas.principal import UserRecord


def _snapshot_to_dict(snap) -> Dict[str, Any]:
    data = snap.to_dict() or {}
    data["id"] = snap.id
    return data


class AdminDataStore:
    def __init__(self, client):
        self._client = client

    @classmethod
    def from_app(cls, app: firebase_admin.App) -> "AdminDataStore":
        return cls(firestore_async.client(app))

    async def get_user(self, uid: str) -> UserRecord:
        """Stored user record for `uid`; a missing document reads as role 'unspecified'."""
        snap = await self._client.collection("users").document(uid).get()
        data = (snap.to_dict() or {}) if snap.exists else {}
        return UserRecord(id=uid, role=data.get("role"))

    async def fetch(self, collection: str, fields: Iterable[str]) -> List[Dict[str, Any]]:
        """All documents of `collection`, projected to `fields` (plus the document id)."""
        query = self._client.collection(collection).select(list(fields))
        return [_snapshot_to_dict(snap) for snap in await query.get()]

    async def count(self, collection: str, status: Optional[str] = None) -> int:
        """Server-side document count, optionally restricted to one status value."""
        query = self._client.collection(collection)
        if status is not None:
            query = query.where(filter=FieldFilter("status", "==", status))
        results = await query.count(alias="total").get()
        # [[AggregationResult]] -> value
        for batch in results:
            for result in batch:
                return int(result.value)
        return 0

    async def list_documents(self, collection: str) -> List[Dict[str, Any]]:
        return [_snapshot_to_dict(snap) async for snap in self._client.collection(collection).stream()]

    async def update_document(
        self, collection: str, doc_id: str, patch: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Apply `patch` to one document and return the stored result.
        Returns None when the document does not exist (nothing is written).
        """
        ref = self._client.collection(collection).document(doc_id)
        snap = await ref.get()
        if not snap.exists:
            return None
        try:
            await ref.update(patch)
        except gexc.NotFound:
            # deleted between the read and the write
            return None
        return _snapshot_to_dict(await ref.get())
