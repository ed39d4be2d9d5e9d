from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.application.dtos.common_dto import HealthResponse, RootResponse
from src.infrastructure.api.dependencies import build_profile_repo
from src.infrastructure.api.routes.webhook_routes import router as webhook_router
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.supabase_client import is_production


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(profile_repo: ProfileRepository | None = None) -> FastAPI:
    """Build the app. The profile repository is created once here and shared by all requests."""
    configure_logging()
    repo = profile_repo if profile_repo is not None else build_profile_repo()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if repo.pg_client is not None:
            repo.pg_client.close()

    app = FastAPI(
        title="Profile Sync Backend",
        version="0.1.0",
        description="""
        ## Profile Sync API

        Receives Supabase Auth user events and mirrors each new user into the
        `user_profiles` table used by the mobile app.

        ### Responses
        The webhook answers in plain text:
        - **200**: `User profile created`
        - **400**: `Only INSERT events are handled`, or the payload has no user
        - **422**: Body is not a JSON object of the expected shape
        - **500**: `Error: <store message>` when the insert fails
        """,
        lifespan=lifespan,
    )
    app.state.profile_repo = repo

    @app.get(
        "/",
        response_model=RootResponse,
        summary="API Root",
        description="Get basic information about the Profile Sync API",
    )
    def root():
        """Get API root information."""
        return {"status": "ok", "service": "profile-sync", "version": app.version}

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="Check if the service is running and which profile store it writes to",
    )
    def health():
        """Check API health status.

        Production running on the in-memory store is reported as degraded,
        since nothing it accepts is persisted.
        """
        if is_production() and repo.backend == "memory":
            return {"status": "degraded", "store": repo.backend}
        return {"status": "healthy", "store": repo.backend}

    app.include_router(webhook_router)
    return app


app = create_app()
