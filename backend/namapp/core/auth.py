"""
# `namapp/core/auth.py` — Admin gate

Every privileged endpoint depends on `get_current_admin`, which runs the full
check on each request (no session or token caching):

1. **Credential:** `Authorization: Bearer <Firebase ID token>` must be present
   and well formed, otherwise `401` before any backend call.
2. **Identity:** the token is verified with Firebase Authentication. Invalid,
   expired or revoked tokens, or a failing verification call, give `401`.
3. **Role:** `users/{uid}.role` must be `"admin"`. A missing document, any
   other role, or an error while reading it gives `403`. Lookup errors are
   logged and treated exactly like "not an admin".

On success the handler receives an `AdminContext`: the caller's uid plus the
privileged data store. The context lives for one request and is never
returned to the client.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from namapp.core.datastore import AdminDataStore
from namapp.core.errors import CredentialMissing, InsufficientPrivilege

logger = logging.getLogger("namapp.auth")


@dataclass(frozen=True)
class AdminContext:
    principal_id: str
    store: AdminDataStore

    def __repr__(self) -> str:
        return f"AdminContext(principal_id={self.principal_id!r})"


def _extract_bearer_token(auth_header: Optional[str]) -> Optional[str]:
    """
    Returns the token from an `Authorization: Bearer <token>` header,
    or None when the header is missing or malformed.
    """
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


async def authorize(auth_header: Optional[str], identity, store: AdminDataStore) -> AdminContext:
    token = _extract_bearer_token(auth_header)
    if not token:
        logger.info("Admin gate: missing credential")
        raise CredentialMissing()

    principal = await identity.resolve(token)

    try:
        user = await store.get_user(principal.id)
    except Exception as exc:
        logger.warning("Admin gate: role lookup failed for %s: %s", principal.id, exc)
        raise InsufficientPrivilege()

    if not user.is_admin:
        logger.info("Admin gate: %s denied (role=%s)", principal.id, user.role)
        raise InsufficientPrivilege()

    return AdminContext(principal_id=principal.id, store=store)


# --------- FastAPI Dependencies --------- #

def get_datastore(request: Request) -> AdminDataStore:
    return request.app.state.datastore


def get_identity(request: Request):
    return request.app.state.identity


async def get_current_admin(request: Request) -> AdminContext:
    """Dependency to allow access only to admin users."""
    return await authorize(
        request.headers.get("Authorization"),
        get_identity(request),
        get_datastore(request),
    )
