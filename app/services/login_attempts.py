"""Best-effort audit trail of unified-login attempts."""

import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import LoginAttempt
from app.schemas.login_attempt import UNKNOWN_IP, LoginAttemptRecord, RequestContext

logger = logging.getLogger(__name__)

USER_AGENT_MAX_LEN = 255


class RecordingFailure(Exception):
    """The audit sink could not store a login attempt."""


class LoginAttemptRecorder(Protocol):
    """Append-only sink for login attempts."""

    def record(self, attempt: LoginAttemptRecord) -> None: ...


class SqlLoginAttemptRecorder:
    """Writes attempts to the login_attempts table in the request's session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def record(self, attempt: LoginAttemptRecord) -> None:
        row = LoginAttempt(
            email=attempt.email,
            ip_address=attempt.ip_address,
            user_agent=attempt.user_agent,
            guard=attempt.guard,
            successful=attempt.successful,
            failure_reason=attempt.failure_reason,
            created_at=attempt.timestamp,
        )
        try:
            self._db.add(row)
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise RecordingFailure(f"Could not store login attempt: {e}") from e


def record_attempt(recorder: LoginAttemptRecorder, attempt: LoginAttemptRecord) -> bool:
    """
    Hand the attempt to the recorder. Returns False if it failed.

    Never raises: the login decision has already been made and stands either way.
    """
    try:
        recorder.record(attempt)
        return True
    except Exception as e:
        logger.exception(
            "Login attempt not recorded (guard=%s, successful=%s): %s",
            attempt.guard,
            attempt.successful,
            e,
        )
        return False


def request_context(client_host: str | None, user_agent: str | None) -> RequestContext:
    """Build the audit context from the raw client address and User-Agent header."""
    ip = (client_host or "").strip() or UNKNOWN_IP
    agent = user_agent[:USER_AGENT_MAX_LEN] if user_agent else None
    return RequestContext(ip_address=ip[:45], user_agent=agent)
