from __future__ import annotations

from fastapi import Request

from src.application.use_cases.sync_user_profile import SyncUserProfileUseCase
from src.infrastructure.database.postgres_client import create_postgres_client
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.supabase_client import create_supabase_client


def build_profile_repo() -> ProfileRepository:
    """Construct the process-wide profile repository from the environment."""
    pg_client = create_postgres_client()
    client = None if pg_client is not None else create_supabase_client()
    return ProfileRepository(client, pg_client=pg_client)


def get_profile_repo(request: Request) -> ProfileRepository:
    return request.app.state.profile_repo


def get_sync_user_profile(request: Request) -> SyncUserProfileUseCase:
    return SyncUserProfileUseCase(get_profile_repo(request))
