"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok", "error"] = Field(default="ok", description="Service status")
    db: bool = Field(description="Whether a trivial query against the database succeeded")
    message: str | None = Field(default=None, description="Failure reason when db is false")
