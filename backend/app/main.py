# File: backend/app/main.py
# Version: v0.4.0
"""
FastAPI app entry.

- Keeps all route assembly in backend/app/api/v1/api.py.
- Mounts /api/* via `api_router`.
- CORS origins and log level come from Settings (core/config.py).
"""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.v1.api import api_router
from backend.app.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(
    title=f"{settings.APP_NAME} API",
    version=settings.APP_VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


# APIs under /api
app.include_router(api_router, prefix=settings.API_PREFIX)

log.info("%s %s ready, API under %s", settings.APP_NAME, settings.APP_VERSION, settings.API_PREFIX)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.app.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL)
