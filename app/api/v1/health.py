"""Liveness of the gateway: credential store reachability and active login settings."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """
    Report whether the admins/staffs database answers, where guard sessions are kept
    and whether the login throttle is on. Used by load balancers and monitoring.
    """
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        session_driver=settings.SESSION_DRIVER,
        login_throttle=settings.LOGIN_THROTTLE_ENABLED,
    )
