# apps/api/main.py

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.deps import get_admin_client
from apps.api.routers import invitations
from core.config import settings
from core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    yield
    if get_admin_client.cache_info().currsize:
        await get_admin_client().aclose()


app = FastAPI(title="Bulk Invite API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(invitations.router)


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}
