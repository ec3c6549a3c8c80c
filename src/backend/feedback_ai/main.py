from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feedback_ai.api.router import api_router
from feedback_ai.core.config import get_settings
from feedback_ai.core.logging import configure_logging

configure_logging()
settings = get_settings()

docs_url = "/docs" if settings.enable_swagger_ui else None
redoc_url = "/redoc" if settings.enable_redoc else None

app = FastAPI(
    title="Feedback AI API",
    version="1.0.0",
    docs_url=docs_url,
    redoc_url=redoc_url,
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=f"/api/{settings.api_version}")


@app.get("/healthz", tags=["health"], include_in_schema=False)
def healthz() -> dict[str, str]:
    return {"status": "ok"}
