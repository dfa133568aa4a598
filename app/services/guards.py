"""Named guards and the request-scoped store of their session slots.

Each guard is an independent authentication context for one principal type. The
store holds at most one slot per guard; the unified login clears every slot before
it establishes a new one, so after a login call at most one guard is active.
"""

import logging
from enum import Enum

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class GuardName(str, Enum):
    """Configured guards, in login priority order."""

    ADMIN = "admin"
    STAFF = "staff"


class GuardSlot(BaseModel):
    """Authenticated principal reference held by one guard."""

    principal_id: int
    remember: bool = False


class GuardSessionStore:
    """
    Enum-keyed map of guard slots for a single request/session.

    session_id names the server-side session the slots were loaded from (None for a
    fresh store); it is replaced whenever the store is persisted.
    """

    def __init__(
        self,
        slots: dict[GuardName, GuardSlot] | None = None,
        session_id: str | None = None,
    ) -> None:
        self._slots: dict[GuardName, GuardSlot] = dict(slots or {})
        self.session_id = session_id

    def check(self, guard: GuardName) -> bool:
        """True if the guard currently holds a session."""
        return guard in self._slots

    def principal_id(self, guard: GuardName) -> int | None:
        slot = self._slots.get(guard)
        return slot.principal_id if slot is not None else None

    def slot(self, guard: GuardName) -> GuardSlot | None:
        return self._slots.get(guard)

    def login(self, guard: GuardName, principal_id: int, remember: bool = False) -> None:
        self._slots[guard] = GuardSlot(principal_id=principal_id, remember=remember)

    def logout(self, guard: GuardName) -> None:
        """End the guard's session; no-op when it has none."""
        self._slots.pop(guard, None)

    def active_guards(self) -> list[GuardName]:
        """Active guards in priority order."""
        return [guard for guard in GuardName if guard in self._slots]

    def is_empty(self) -> bool:
        return not self._slots


def clear_all_guards(store: GuardSessionStore) -> None:
    """Log out of every configured guard that has an active session. Idempotent."""
    for guard in GuardName:
        if store.check(guard):
            store.logout(guard)
            logger.debug("Cleared guard session: guard=%s", guard.value)


def clear_all_guards_except(store: GuardSessionStore, keep: GuardName) -> None:
    """Log out of every active guard other than keep. Idempotent."""
    for guard in GuardName:
        if guard is not keep and store.check(guard):
            store.logout(guard)
            logger.debug("Cleared guard session: guard=%s", guard.value)
