"""ProjectPilot backend - Main Application."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
import structlog

from config import get_settings
from gateway import OriginAllowList, OriginGateMiddleware, UploadLimitMiddleware
from chat import router as chat_router
from schedules import router as schedule_router

logger = structlog.get_logger()
settings = get_settings()
allow_list = OriginAllowList(settings.allowed_origins, settings.origin_match)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(
        "starting_projectpilot_backend",
        environment=settings.environment,
        completion_configured=settings.completion_configured,
        speech_enabled=settings.speech_enabled,
        origin_match=settings.origin_match,
    )
    yield
    logger.info("shutting_down_projectpilot_backend")


app = FastAPI(
    title="ProjectPilot Backend",
    version="1.0.0",
    description="Relay for the Aero project management coach and schedule risk analysis",
    lifespan=lifespan,
)

# Innermost, so a 413 still carries CORS headers
app.add_middleware(
    UploadLimitMiddleware,
    paths=["/api/upload-schedule"],
    max_upload_bytes=settings.max_upload_bytes,
)
# CORS headers for accepted origins
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=allow_list.as_regex(),
    allow_methods=["*"],
    allow_headers=["*"],
)
# Added last so it runs first, ahead of preflight handling
app.add_middleware(OriginGateMiddleware, allow_list=allow_list)

# Include routers
app.include_router(chat_router, prefix="/api/chat", tags=["Chat"])
app.include_router(schedule_router, prefix="/api", tags=["Schedule"])


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness check."""
    return "ProjectPilot backend is running."


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "service": "projectpilot-backend"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
    )
