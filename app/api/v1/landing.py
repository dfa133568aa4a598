"""Guard-protected landing routes the login destinations resolve to."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.auth import require_guard
from app.schemas.auth import CurrentPrincipal
from app.services.authenticators import ADMIN_DESTINATION, STAFF_DESTINATION
from app.services.guards import GuardName

router = APIRouter()


@router.get("/admin/dashboard", response_model=CurrentPrincipal, name=ADMIN_DESTINATION)
def admin_dashboard(
    admin: Annotated[CurrentPrincipal, Depends(require_guard(GuardName.ADMIN))],
) -> CurrentPrincipal:
    """Admin landing page (admin guard only)."""
    return admin


@router.get("/staff/profile", response_model=CurrentPrincipal, name=STAFF_DESTINATION)
def staff_profile(
    staff: Annotated[CurrentPrincipal, Depends(require_guard(GuardName.STAFF))],
) -> CurrentPrincipal:
    """Staff landing page (active staff guard only)."""
    return staff
