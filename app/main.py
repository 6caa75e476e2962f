"""
Job Portal - Main Application

FastAPI backend with:
- Relational store (PostgreSQL, SQLAlchemy) for users, jobs, applications, resumes
- JWT authentication with HR / USER roles
- Resume uploads to local disk or Cloudinary
- Authenticated WebSocket events ("new-application", "job-expired")

Run: uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.error_handlers import register_error_handlers
from app.api.routes import api_router
from app.core.config import get_settings
from app.core.logging_config import setup_logging
from app.db.database import check_database_connection
from app.db.tables import init_db
from app.realtime.bus import EventBus
from app.realtime.socket_routes import router as socket_router

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and the event bus on startup."""
    setup_logging(settings.log_level)
    init_db()

    if settings.realtime_enabled:
        app.state.event_bus = EventBus(outbox_size=settings.realtime_outbox_size)
        logger.info("Real-time events enabled on /ws")
    else:
        app.state.event_bus = None
        logger.info("Real-time events disabled")

    logger.info("Job Portal API started")
    yield
    logger.info("Job Portal API shutting down")


# Create FastAPI app
app = FastAPI(
    title="Job Portal API",
    description="""
    HR users post and expire jobs, review applications and manage resumes;
    job seekers browse jobs and apply.

    ## Features
    - **Authentication**: JWT-based auth for HR and USER roles
    - **Jobs**: Post, list, expire, apply
    - **Applications**: Per-job and per-user listings
    - **Resumes**: Bulk upload, download, delete
    - **Dashboard**: HR analytics
    - **Realtime**: `/ws` pushes new-application and job-expired events
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")
app.include_router(socket_router)

# Serve locally stored resumes
app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")


@app.get("/", tags=["Health"])
async def root():
    """Service summary."""
    return {
        "message": "Job Portal API is running!",
        "version": app.version,
        "docs": "/docs",
        "realtime": "/ws",
    }


@app.get("/api/health", tags=["Health"])
async def health_check(request: Request):
    """Detailed health check."""
    bus = getattr(request.app.state, "event_bus", None)
    return {
        "status": "OK",
        "database": "Connected" if check_database_connection() else "Disconnected",
        "socket": "Active" if bus is not None else "Disabled",
        "connections": bus.connection_count if bus is not None else 0,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
