"""Server-side guard sessions and the signed token that names them.

The token carries only a session id; the guard slots live in a repository. Persisting
a store always destroys the session it was loaded from and, if any guard is still
active, writes the slots under a new id. Older tokens therefore stop working as soon
as the guards are cleared, replaced, or logged out.
"""

import logging
import secrets
from datetime import UTC, datetime
from threading import Lock
from typing import Any, Protocol

import jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import create_session_token, decode_session_token, session_lifetime
from app.models import GuardSessionRecord
from app.services.guards import GuardName, GuardSessionStore

logger = logging.getLogger(__name__)

_GUARD_VALUES = {guard.value: guard for guard in GuardName}


class SessionRepository(Protocol):
    """Storage for guard slots keyed by session id."""

    def read(self, session_id: str) -> dict[str, Any] | None: ...

    def write(self, session_id: str, guards: dict[str, Any], expires_at: datetime) -> None: ...

    def destroy(self, session_id: str) -> None: ...

    def purge_expired(self) -> int: ...


class InMemorySessionRepository:
    """Process-local sessions (SESSION_DRIVER=memory). Expired entries are dropped on write."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._sessions: dict[str, tuple[dict[str, Any], datetime]] = {}

    def read(self, session_id: str) -> dict[str, Any] | None:
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            guards, expires_at = entry
            if expires_at <= datetime.now(UTC):
                del self._sessions[session_id]
                return None
            return dict(guards)

    def write(self, session_id: str, guards: dict[str, Any], expires_at: datetime) -> None:
        with self._lock:
            self._purge(datetime.now(UTC))
            self._sessions[session_id] = (dict(guards), expires_at)

    def destroy(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        with self._lock:
            return self._purge(datetime.now(UTC))

    def _purge(self, now: datetime) -> int:
        expired = [sid for sid, (_, expires_at) in self._sessions.items() if expires_at <= now]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


class SqlSessionRepository:
    """Sessions in the guard_sessions table (SESSION_DRIVER=database)."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def read(self, session_id: str) -> dict[str, Any] | None:
        row = (
            self._db.query(GuardSessionRecord)
            .filter(
                GuardSessionRecord.id == session_id,
                GuardSessionRecord.expires_at > datetime.now(UTC),
            )
            .first()
        )
        return dict(row.guards) if row is not None else None

    def write(self, session_id: str, guards: dict[str, Any], expires_at: datetime) -> None:
        self._db.add(GuardSessionRecord(id=session_id, guards=guards, expires_at=expires_at))
        self._commit()

    def destroy(self, session_id: str) -> None:
        self._db.query(GuardSessionRecord).filter(
            GuardSessionRecord.id == session_id
        ).delete(synchronize_session=False)
        self._commit()

    def purge_expired(self) -> int:
        deleted = (
            self._db.query(GuardSessionRecord)
            .filter(GuardSessionRecord.expires_at <= datetime.now(UTC))
            .delete(synchronize_session=False)
        )
        self._commit()
        return deleted

    def _commit(self) -> None:
        try:
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise


def is_remembered(store: GuardSessionStore) -> bool:
    """True when any active slot asked for a persistent session."""
    return any(store.slot(guard).remember for guard in store.active_guards())


class GuardSessionManager:
    """Load a GuardSessionStore from a token and persist it back under a fresh id."""

    def __init__(self, repository: SessionRepository) -> None:
        self._repository = repository

    def load(self, token: str | None) -> GuardSessionStore:
        """
        Rebuild the store named by a session token.

        Missing, expired, tampered or revoked tokens yield an empty store; unknown
        guard names and malformed slots are skipped.
        """
        if not token:
            return GuardSessionStore()
        try:
            payload = decode_session_token(token)
        except jwt.PyJWTError as e:
            logger.debug("Ignoring invalid session token: %s", e)
            return GuardSessionStore()
        session_id = payload.get("sid")
        if not isinstance(session_id, str) or not session_id:
            return GuardSessionStore()
        guards = self._repository.read(session_id)
        if guards is None:
            return GuardSessionStore()

        store = GuardSessionStore(session_id=session_id)
        for name, slot in guards.items():
            guard = _GUARD_VALUES.get(name)
            if guard is None or not isinstance(slot, dict):
                continue
            try:
                principal_id = int(slot.get("sub"))
            except (TypeError, ValueError):
                continue
            store.login(guard, principal_id, remember=bool(slot.get("remember", False)))
        return store

    def persist(self, store: GuardSessionStore) -> str | None:
        """
        End the session the store came from, then save the active slots under a new id.

        Returns the new token, or None when no guard is active.
        """
        self.discard(store)
        if store.is_empty():
            return None
        remember = is_remembered(store)
        guards = {
            guard.value: {"sub": str(store.principal_id(guard)), "remember": store.slot(guard).remember}
            for guard in store.active_guards()
        }
        session_id = secrets.token_urlsafe(32)
        self._repository.write(session_id, guards, datetime.now(UTC) + session_lifetime(remember))
        store.session_id = session_id
        return create_session_token(session_id, remember=remember)

    def discard(self, store: GuardSessionStore) -> None:
        """Destroy the server-side session behind the store, if any."""
        if store.session_id is not None:
            self._repository.destroy(store.session_id)
            store.session_id = None
