from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from src.application.dtos.webhook_dto import InboundEvent
from src.domain.entities.profile import ProfileRecord
from src.domain.errors import MalformedEventError, UnsupportedEventError
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

INSERT_EVENT = "INSERT"


@dataclass
class SyncUserProfileUseCase:
    profiles: ProfileRepository

    def execute(self, body: dict[str, Any]) -> ProfileRecord:
        """
        Mirror a newly created auth user into the profile store.

        The event type is checked on the raw body before anything else is
        looked at. Issues at most one insert. Store failures propagate as
        ProfileStoreError and are not retried.
        """
        event = body.get("event")
        if event != INSERT_EVENT:
            raise UnsupportedEventError(event)

        try:
            payload = InboundEvent.model_validate(body)
        except ValidationError as exc:
            raise MalformedEventError(
                f"Event payload has an invalid shape: {exc.error_count()} error(s)"
            ) from exc

        user = payload.session.user if payload.session else None
        if user is None or not user.id:
            raise MalformedEventError("Event payload is missing session.user")

        meta = user.raw_user_meta_data
        record = ProfileRecord(
            id=user.id,
            email=user.email,
            phone=meta.phone if meta else None,
            display_name=meta.display_name if meta else None,
            user_type=meta.user_type if meta else None,
        )
        created = self.profiles.insert(record)
        logger.info("Created profile for user %s", created.id)
        return created
