"""Common DTOs for API responses."""
from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Health status", examples=["healthy"])
    store: str = Field(..., description="Profile store backend in use", examples=["supabase"])


class RootResponse(BaseModel):
    """Root endpoint response model."""
    status: str = Field(..., description="API status", examples=["ok"])
    service: str = Field(..., description="Service name", examples=["profile-sync"])
    version: str = Field(..., description="API version", examples=["0.1.0"])
