from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import PlainTextResponse

from src.application.use_cases.sync_user_profile import SyncUserProfileUseCase
from src.domain.errors import MalformedEventError, ProfileStoreError, UnsupportedEventError
from src.infrastructure.api.dependencies import get_sync_user_profile

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/webhooks",
    tags=["Webhooks"],
    responses={
        422: {"description": "Validation Error - Body is not a JSON object"}
    },
)


@router.post(
    "/handle-new-user",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
    summary="Mirror New Auth User",
    description="""
    Receive an auth user event and create the matching row in `user_profiles`.

    Only `INSERT` events are handled. The profile row is built from
    `session.user` (`id`, `email`) and `session.user.raw_user_meta_data`
    (`phone`, `display_name`, `user_type`).

    Failed writes are reported back and not retried.
    """,
    response_description="Plain text confirmation",
    responses={
        400: {"description": "Bad Request - Not an INSERT event, or the user part of the payload is missing or malformed"},
        500: {"description": "Store Error - The profile insert failed"},
    },
)
def handle_new_user(
    body: dict[str, Any] = Body(..., description="Auth user event, shaped like `InboundEvent`"),
    sync: SyncUserProfileUseCase = Depends(get_sync_user_profile),
):
    """Create a user profile for a newly inserted auth user."""
    try:
        sync.execute(body)
    except UnsupportedEventError as exc:
        logger.warning("Ignoring %r event", exc.event)
        return PlainTextResponse(str(exc), status_code=status.HTTP_400_BAD_REQUEST)
    except MalformedEventError as exc:
        logger.warning("Rejecting event: %s", exc)
        return PlainTextResponse(str(exc), status_code=status.HTTP_400_BAD_REQUEST)
    except ProfileStoreError as exc:
        logger.error("Profile insert failed: %s", exc.message)
        return PlainTextResponse(
            f"Error: {exc.message}", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return PlainTextResponse("User profile created", status_code=status.HTTP_200_OK)
