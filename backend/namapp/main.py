"""
# `namapp/main.py` — Application entry point

## Overview
Builds the FastAPI application for the NamApp admin backend: CORS, routers,
logging, and the long-lived Firebase clients.

---

## Startup
`create_app()` takes optional, already-built collaborators:
- `datastore` — privileged Firestore access (`AdminDataStore`)
- `identity` — bearer token verification (`FirebaseIdentity`)
- `sms` — SMS gateway client (`SMSClient`)

Anything not passed in is built once, in the lifespan handler, from
`get_settings()` via `init_firebase`. The instances live on `app.state` and
are handed to routes through dependencies; nothing is re-created per request.

---

## Routers (prefix `/admin`)
- `GET /admin/stats`
- `GET /admin/orders`, `PATCH /admin/orders`

## Other routers
- `POST /sms`, `GET /sms/debug` (admin-only)

All routes are protected with `get_current_admin`.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from namapp.config import Settings, get_settings, init_firebase
from namapp.core.datastore import AdminDataStore
from namapp.core.identity import FirebaseIdentity
from namapp.integrations.sms import SMSClient
from namapp.routers import admin_dashboard, orders, sms as sms_router


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def _lifespan(app: FastAPI):
    state = app.state
    if state.datastore is None or state.identity is None or state.sms is None:
        settings = state.settings or get_settings()
        configure_logging(settings.log_level)
        if state.datastore is None or state.identity is None:
            firebase_app = init_firebase(settings)
            if state.datastore is None:
                state.datastore = AdminDataStore.from_app(firebase_app)
            if state.identity is None:
                state.identity = FirebaseIdentity(firebase_app)
        if state.sms is None:
            state.sms = SMSClient(settings)
    yield


def create_app(
    settings: Optional[Settings] = None,
    datastore: Optional[AdminDataStore] = None,
    identity=None,
    sms: Optional[SMSClient] = None,
) -> FastAPI:
    app = FastAPI(
        title="NamApp Admin API",
        description="Admin gate, dashboard statistics, order administration and SMS relay.",
        version="1.0.0",
        redirect_slashes=False,
        lifespan=_lifespan,
    )
    app.state.settings = settings
    app.state.datastore = datastore
    app.state.identity = identity
    app.state.sms = sms

    allow_origins = settings.origins if settings else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include admin routers (with prefix /admin)
    app.include_router(admin_dashboard.router, prefix="/admin")
    app.include_router(orders.admin_router, prefix="/admin")
    app.include_router(sms_router.router)
    return app


app = create_app(get_settings())

# Run the app directly with uvicorn (for development)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("namapp.main:app", host="0.0.0.0", port=8000, reload=True)
