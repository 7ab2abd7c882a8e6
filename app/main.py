"""FastAPI application entry point for the CareerSync AI assistant."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings, setup_logging
from app.routers.account_router import router as account_router
from app.routers.conversation_router import router as conversation_router
from app.routers.feature_router import router as feature_router

# Initialise logging early
setup_logging()
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    application = FastAPI(
        title="CareerSync AI",
        description=(
            "Career assistance API: ATS-scored CV analysis, job matching, skills "
            "roadmaps, career chat and a mock-interview simulator, backed by a "
            "hosted chat-completion model."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS: allow all origins during development
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    application.include_router(feature_router)
    application.include_router(conversation_router)
    application.include_router(account_router)

    @application.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @application.on_event("startup")
    async def _startup() -> None:
        logger.info(
            "CareerSync starting — model=%s mode=%s auth=%s",
            settings.completion_model,
            settings.completion_mode,
            "supabase" if settings.supabase_url else "anonymous",
        )

    return application


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=True,
    )
