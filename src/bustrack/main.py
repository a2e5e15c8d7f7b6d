"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import buses, exports, fleet, health, portal, routes, schools, students
from .config import settings
from .services.fleet import FleetFeed


def create_app(feed: FleetFeed | None = None) -> FastAPI:
    fleet_feed = feed or FleetFeed()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.feed_autostart:
            fleet_feed.start(settings.poll_interval("tracking"))
        yield
        fleet_feed.stop()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.fleet_feed = fleet_feed
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(schools.router, prefix=settings.api_prefix)
    app.include_router(buses.router, prefix=settings.api_prefix)
    app.include_router(students.router, prefix=settings.api_prefix)
    app.include_router(routes.router, prefix=settings.api_prefix)
    app.include_router(fleet.router, prefix=settings.api_prefix)
    app.include_router(portal.router, prefix=settings.api_prefix)
    app.include_router(exports.router, prefix=settings.api_prefix)
    return app


app = create_app()
