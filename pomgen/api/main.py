from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..core.settings import load_env_files


class HealthPollFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # Suppress GET /healthz access logs
        return "/healthz" not in record.getMessage()


logging.getLogger("uvicorn.access").addFilter(HealthPollFilter())

# Ensure .env is loaded before routers read settings
load_env_files()

app = FastAPI(title="pomgen", version="0.1.0")

# CORS for local UI dev server; adjust via env ALLOW_ORIGINS if needed
allow_origins = os.getenv("ALLOW_ORIGINS", "http://localhost:5178").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in allow_origins if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

from .routers import health as r_health
from .routers import codegen as r_codegen

app.include_router(r_health.router)
app.include_router(r_codegen.router)


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8001"))
    uvicorn.run("pomgen.api.main:app", host=host, port=port, reload=False)
