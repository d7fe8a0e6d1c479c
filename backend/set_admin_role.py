#!/usr/bin/env python3
"""
Grants the admin role to an existing Firebase user.

Writes role='admin' (merged) into the user's Firestore document, which is
what the admin gate checks.
"""

import sys
from datetime import datetime, timezone

from firebase_admin import auth, firestore

from namapp.config import get_settings, init_firebase

ADMIN_PERMISSIONS = ["manage_users", "manage_apps", "view_analytics"]


def set_admin_role(user_email: str) -> bool:
    """Marks the user with this e-mail as admin in users/{uid}."""

    try:
        app = init_firebase(get_settings())
        print("✅ Firebase Admin SDK initialized")
    except Exception as e:
        print(f"❌ Firebase initialization failed: {e}")
        return False

    try:
        user = auth.get_user_by_email(user_email, app=app)
        print(f"✅ User found: {user.uid} - {user.email}")

        ref = firestore.client(app).collection("users").document(user.uid)
        ref.set({
            "role": "admin",
            "permissions": ADMIN_PERMISSIONS,
            "updated_at": datetime.now(timezone.utc),
        }, merge=True)

        # Read back
        stored = ref.get().to_dict() or {}
        print(f"✅ Stored role: {stored.get('role')}")
        return stored.get("role") == "admin"

    except auth.UserNotFoundError:
        print(f"❌ User not found: {user_email}")
        return False
    except Exception as e:
        print(f"❌ Error setting admin role: {e}")
        return False


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python set_admin_role.py <user_email>")
        print("Example: python set_admin_role.py admin@namapps.com")
        sys.exit(1)

    user_email = sys.argv[1]
    print(f"Setting admin role for: {user_email}")

    if set_admin_role(user_email):
        print("🎉 Admin role set successfully!")
    else:
        print("💥 Failed to set admin role")
        sys.exit(1)
