"""Error response schema."""

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every error response."""

    status: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Human readable error message")
    timestamp: datetime = Field(default_factory=datetime.now)
