from __future__ import annotations

import os
from fastapi import APIRouter


router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthcheck():
    return {
        "status": "ok",
        "service": "pomgen",
        "version": os.getenv("APP_VERSION", "dev"),
    }
