"""Response envelopes shared by every route: the error body and the welcome payload.

Exception handlers and the routes build `ErrorBody` from a classified `Failure`.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    """Body of every error response."""

    status: int = Field(examples=[400])
    message: str = Field(examples=["Username is blank. Account creation failed."])
    timestamp: datetime


class WelcomeResponse(BaseModel):
    data: Any = None
    message: str
    success: bool = True
