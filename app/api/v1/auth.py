"""Unified login, logout and guard dependencies (get_current_principal, require_guard)."""

import logging
from collections.abc import Callable
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.messages import auth_failed_message, too_many_attempts_message
from app.core.security import session_lifetime
from app.schemas.auth import CurrentPrincipal, LoginRequest, LoginResponse
from app.services.authenticators import build_authenticators
from app.services.guards import GuardName, GuardSessionStore, clear_all_guards
from app.services.login_attempts import SqlLoginAttemptRecorder, request_context
from app.services.principals import get_admin, get_staff
from app.services.rate_limit import (
    InMemoryLoginRateLimiter,
    LoginRateLimiter,
    throttle_key,
)
from app.services.session import (
    GuardSessionManager,
    InMemorySessionRepository,
    SqlSessionRepository,
    is_remembered,
)
from app.services.unified_login import AuthenticationFailed, UnifiedLoginOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_login_orchestrator(
    db: Annotated[Session, Depends(get_db)],
) -> UnifiedLoginOrchestrator:
    """Dependency: orchestrator over the admins and staffs tables, auditing to login_attempts."""
    return UnifiedLoginOrchestrator(build_authenticators(db), SqlLoginAttemptRecorder(db))


@lru_cache
def get_login_rate_limiter() -> LoginRateLimiter | None:
    """Dependency: process-wide login throttle, or None when LOGIN_THROTTLE_ENABLED is off."""
    if not settings.LOGIN_THROTTLE_ENABLED:
        return None
    return InMemoryLoginRateLimiter(
        max_attempts=settings.LOGIN_MAX_ATTEMPTS,
        decay_seconds=settings.LOGIN_DECAY_SECONDS,
    )


@lru_cache
def _memory_sessions() -> InMemorySessionRepository:
    return InMemorySessionRepository()


def get_session_manager(
    db: Annotated[Session, Depends(get_db)],
) -> GuardSessionManager:
    """Dependency: guard sessions stored per SESSION_DRIVER."""
    if settings.SESSION_DRIVER == "memory":
        return GuardSessionManager(_memory_sessions())
    return GuardSessionManager(SqlSessionRepository(db))


def get_guard_session(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    sessions: Annotated[GuardSessionManager, Depends(get_session_manager)],
) -> GuardSessionStore:
    """Dependency: guard slots of the session named by the Bearer token, else by the cookie."""
    if credentials is not None:
        return sessions.load(credentials.credentials)
    return sessions.load(request.cookies.get(settings.SESSION_COOKIE_NAME))


def _set_session_cookie(response: Response, token: str, remember: bool) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(session_lifetime(True).total_seconds()) if remember else None,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def _delete_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def _authentication_failed_response() -> JSONResponse:
    """Validation-style error on the email field; identical for every failure cause."""
    failure = JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": [
                {
                    "loc": ["body", "email"],
                    "msg": auth_failed_message(settings.APP_LOCALE),
                    "type": "authentication_failed",
                }
            ]
        },
    )
    _delete_session_cookie(failure)
    return failure


@router.post("/unified-login", response_model=LoginResponse, name="unified-login")
def unified_login(
    body: LoginRequest,
    request: Request,
    response: Response,
    orchestrator: Annotated[UnifiedLoginOrchestrator, Depends(get_login_orchestrator)],
    sessions: Annotated[GuardSessionManager, Depends(get_session_manager)],
    guard_session: Annotated[GuardSessionStore, Depends(get_guard_session)],
    limiter: Annotated[LoginRateLimiter | None, Depends(get_login_rate_limiter)],
) -> LoginResponse | JSONResponse:
    """
    Log in as admin or staff with one email/password pair.

    The session the request arrived with is destroyed whatever the outcome, so no
    earlier token keeps working. On success exactly one guard is active under a new
    session, whose token is set as a cookie and returned for Bearer use, and the
    response names the destination route. Every failure looks the same.
    """
    context = request_context(
        request.client.host if request.client else None,
        request.headers.get("user-agent"),
    )
    key = throttle_key(body.email, context.ip_address)
    if limiter is not None and limiter.too_many_attempts(key):
        seconds = limiter.available_in(key)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=too_many_attempts_message(settings.APP_LOCALE, seconds),
            headers={"Retry-After": str(seconds)},
        )

    try:
        result = orchestrator.authenticate(
            body.email,
            body.password,
            body.remember,
            guard_session,
            context,
        )
    except AuthenticationFailed:
        sessions.persist(guard_session)
        if limiter is not None:
            limiter.hit(key)
        return _authentication_failed_response()
    except Exception:
        logger.exception("Unified login aborted; ending the previous session")
        sessions.discard(guard_session)
        raise

    if limiter is not None:
        limiter.clear(key)
    token = sessions.persist(guard_session)
    _set_session_cookie(response, token, is_remembered(guard_session))
    return LoginResponse(
        guard=result.guard,
        destination=result.destination,
        access_token=token,
        token_type="bearer",
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, name="logout")
def logout(
    sessions: Annotated[GuardSessionManager, Depends(get_session_manager)],
    guard_session: Annotated[GuardSessionStore, Depends(get_guard_session)],
) -> Response:
    """End every guard session server-side and drop the cookie. Safe to call when logged out."""
    clear_all_guards(guard_session)
    sessions.persist(guard_session)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    _delete_session_cookie(response)
    return response


def get_current_principal(
    guard_session: Annotated[GuardSessionStore, Depends(get_guard_session)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentPrincipal:
    """Dependency: principal of the active guard. Raises 401 if none, or if the row is gone or inactive."""
    active = guard_session.active_guards()
    if not active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    guard = active[0]
    principal_id = guard_session.principal_id(guard)
    if guard is GuardName.ADMIN:
        principal = get_admin(db, principal_id)
    else:
        principal = get_staff(db, principal_id)
        if principal is not None and not principal.is_active:
            principal = None
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CurrentPrincipal(
        guard=guard,
        id=principal.id,
        name=principal.name,
        email=principal.email,
    )


def require_guard(guard: GuardName) -> Callable[..., CurrentPrincipal]:
    """Dependency factory: require an authenticated principal of the given guard. Raises 401 otherwise."""

    def dependency(
        current: Annotated[CurrentPrincipal, Depends(get_current_principal)],
    ) -> CurrentPrincipal:
        if current.guard is not guard:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return current

    return dependency


@router.get("/me", response_model=CurrentPrincipal)
def me(
    current: Annotated[CurrentPrincipal, Depends(get_current_principal)],
) -> CurrentPrincipal:
    """Return the principal behind the current session."""
    return current
