import os
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'src' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SUPABASE_DISABLED", "1")
os.environ.setdefault("USE_LOCAL_DB", "0")


@pytest.fixture()
def profile_repo():
    # lazy import after env configured
    from src.infrastructure.database.repositories.profile_repository import ProfileRepository

    return ProfileRepository(None)


@pytest.fixture()
def client(profile_repo) -> TestClient:
    from src.main import create_app

    return TestClient(create_app(profile_repo))


@pytest.fixture()
def failing_repo():
    from src.domain.errors import ProfileStoreError
    from src.infrastructure.database.repositories.profile_repository import ProfileRepository

    repo = Mock(spec=ProfileRepository)
    repo.pg_client = None
    repo.backend = "memory"
    repo.insert.side_effect = ProfileStoreError("duplicate key")
    return repo


@pytest.fixture()
def insert_event() -> dict:
    return {
        "event": "INSERT",
        "session": {
            "user": {
                "id": "u1",
                "email": "a@b.com",
                "raw_user_meta_data": {
                    "phone": "123",
                    "display_name": "Ann",
                    "user_type": "farmer",
                },
            }
        },
    }
