# namapp/core/identity.py
from datetime import datetime, timezone
from typing import Optional

import firebase_admin
from fastapi.concurrency import run_in_threadpool
from firebase_admin import auth as firebase_auth

from namapp.core.errors import CredentialInvalid
from namapp.schemas.principal import Principal


def token_to_principal(decoded: dict) -> Principal:
    """
    Builds a Principal from a decoded Firebase ID token.
    `email_verified_at` is the token's auth_time when the e-mail is verified.
    """
    uid = decoded.get("uid") or decoded.get("user_id")
    if not uid:
        raise CredentialInvalid("Invalid token payload")

    verified_at = None
    auth_time = decoded.get("auth_time")
    if decoded.get("email_verified") and isinstance(auth_time, (int, float)):
        verified_at = datetime.fromtimestamp(auth_time, tz=timezone.utc)

    return Principal(id=uid, email=decoded.get("email"), email_verified_at=verified_at)


class FirebaseIdentity:
    """Resolves bearer tokens with Firebase Authentication."""

    def __init__(self, app: Optional[firebase_admin.App] = None):
        self._app = app

    def _verify(self, id_token: str) -> dict:
        # check_revoked=True -> tokens issued before a logout are rejected
        return firebase_auth.verify_id_token(id_token, app=self._app, check_revoked=True)

    async def resolve(self, id_token: str) -> Principal:
        """
        Verifies the ID token (signature, expiry, revocation).
        Any failure raises CredentialInvalid; the call is never retried.
        """
        try:
            decoded = await run_in_threadpool(self._verify, id_token)
        except firebase_auth.ExpiredIdTokenError:
            raise CredentialInvalid("Token expired")
        except firebase_auth.RevokedIdTokenError:
            raise CredentialInvalid("Session revoked")
        except Exception:
            raise CredentialInvalid()
        return token_to_principal(decoded)
