"""Error body returned by every failing endpoint."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    erro: str = Field(description="Human-readable reason, in Portuguese")
