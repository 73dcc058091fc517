"""
Eventra - virtual and hybrid event planning API
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

import eventra.models  # noqa: F401 - registers tables on Base.metadata
from eventra.core.config import settings
from eventra.core.db import engine, Base, SessionLocal
from eventra.api import (
    routes_ai,
    routes_analytics,
    routes_events,
    routes_guests,
    routes_public,
    routes_tasks,
    routes_users,
    routes_vendors,
    ws,
)
from eventra.api.error_handlers import register_error_handlers
from eventra.services.preference_service import PreferenceService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")

    db = SessionLocal()
    try:
        PreferenceService.seed_planning_tips(db)
    finally:
        db.close()

    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Eventra",
    description="Backend for planning virtual, hybrid and in-person events",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(routes_public.router, prefix="/api", tags=["public"])
app.include_router(routes_events.router, prefix="/api/events", tags=["events"])
app.include_router(routes_tasks.router, prefix="/api", tags=["tasks"])
app.include_router(routes_guests.router, prefix="/api", tags=["guests"])
app.include_router(routes_vendors.router, prefix="/api", tags=["vendors"])
app.include_router(routes_analytics.router, prefix="/api", tags=["analytics"])
app.include_router(routes_ai.router, prefix="/api/ai", tags=["ai"])
app.include_router(routes_users.router, prefix="/api", tags=["users"])
app.include_router(ws.router, prefix="/ws", tags=["websocket"])
app.include_router(routes_public.page_router, tags=["public"])

@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {"name": "Eventra API", "version": "1.0.0", "docs": "/docs"}

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
