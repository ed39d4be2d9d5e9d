"""Payload models for the auth user webhook."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawUserMetaData(BaseModel):
    """Metadata the mobile app attaches at sign-up."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    phone: str | None = Field(None, description="Phone number entered at sign-up", examples=["+919800000000"])
    display_name: str | None = Field(None, description="Name shown in the app", examples=["Ann"])
    user_type: str | None = Field(None, description="Account type chosen at sign-up", examples=["farmer"])


class AuthUser(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str | None = Field(None, description="Auth user id")
    email: str | None = Field(None, description="Auth user email", examples=["user@example.com"])
    raw_user_meta_data: RawUserMetaData | None = None


class EventSession(BaseModel):
    model_config = ConfigDict(extra="allow")

    user: AuthUser | None = None


class InboundEvent(BaseModel):
    """Event notification sent by the identity provider."""
    model_config = ConfigDict(extra="allow")

    event: Any = Field(None, description="Database event type", examples=["INSERT"])
    session: EventSession | None = None
