"""FastAPI application."""
import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .domain_errors import DomainError
from .problem_details import domain_error_handler
from .routers import task_letters

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"

# Create app
app = FastAPI(
    title="Task Letter Registry",
    version=APP_VERSION,
    description="Backend API for issuing and tracking official travel task letters",
)

# Production safety checks (explicit frontend origins only).
if settings.ENV.lower() == "production" and not settings.cors_origins:
    raise RuntimeError("ALLOWED_ORIGINS must be set in production (explicit frontend origin required).")
if settings.ENV.lower() == "production" and any(origin == "*" for origin in settings.cors_origins):
    raise RuntimeError("ALLOWED_ORIGINS must be explicit in production (no wildcard).")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"] if settings.ENV.lower() == "production" else ["*"],
)

app.add_exception_handler(DomainError, domain_error_handler)

# Include routers
app.include_router(task_letters.router, prefix="/api/v1")


@app.get("/api/v1/system/health")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint."""
    database = "ok"
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        database = "unavailable"
    return {
        "status": "ok" if database == "ok" else "degraded",
        "version": APP_VERSION,
        "database": database,
    }


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Task Letter Registry API",
        "version": APP_VERSION,
        "docs": "/docs",
    }
