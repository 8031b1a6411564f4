"""Liveness/readiness probe for load balancers and monitoring."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.deps import get_app_settings
from app.core.config import APP_NAME, APP_VERSION, Settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Always 200; status is 'degraded' when the database does not answer."""
    connected = check_db_connected(db)
    return HealthResponse(
        status="ok" if connected else "degraded",
        service=APP_NAME,
        version=APP_VERSION,
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
        checked_at=datetime.now(UTC),
    )
