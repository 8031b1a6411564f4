"""Health check response."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"] = Field(description="'degraded' when the database is unreachable")
    service: str
    version: str
    environment: str = Field(description="dev or prod")
    database: Literal["connected", "disconnected"]
    checked_at: datetime
