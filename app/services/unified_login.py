"""Unified login: one email/password submission, two principal tables, one guard session.

The orchestrator is the only place that decides which guard becomes active:

1. Clear every guard session, whatever the outcome.
2. Try each authenticator in fixed priority order (admin, then staff); the first
   success establishes the only session and wins even if a lower-priority table
   holds the same email.
3. On total failure raise AuthenticationFailed, which carries no reason.

Exactly one audit record is written per call. Recording is best-effort and never
changes the decision.
"""

import logging
from collections.abc import Sequence

from app.schemas.auth import LoginResult
from app.schemas.login_attempt import LoginAttemptRecord, RequestContext
from app.services.authenticators import Authenticator, FailureReason, Principal
from app.services.guards import GuardName, GuardSessionStore, clear_all_guards
from app.services.login_attempts import LoginAttemptRecorder, record_attempt

logger = logging.getLogger(__name__)


class AuthenticationFailed(Exception):
    """Uniform login failure. Deliberately says nothing about the cause."""

    def __init__(self) -> None:
        super().__init__("Authentication failed")


class UnifiedLoginOrchestrator:
    """Authenticate against the configured guards in priority order."""

    def __init__(
        self,
        authenticators: Sequence[Authenticator],
        recorder: LoginAttemptRecorder,
    ) -> None:
        self._authenticators = list(authenticators)
        self._recorder = recorder

    def authenticate(
        self,
        email: str,
        password: str,
        remember: bool,
        guard_session: GuardSessionStore,
        context: RequestContext | None = None,
    ) -> LoginResult:
        """
        Log in as the first guard whose table accepts the credentials.

        Raises AuthenticationFailed when no guard does; guard_session is left empty.
        Errors from the credential store propagate after a failed attempt is recorded.
        """
        context = context or RequestContext()
        clear_all_guards(guard_session)

        try:
            authenticator, principal, first_match = self._first_success(email, password)
        except Exception:
            self._record(email, context, None, successful=False, failure_reason=FailureReason.ERROR)
            raise

        if authenticator is not None:
            guard_session.login(authenticator.guard, principal.id, remember=remember)
            logger.info(
                "Login succeeded: guard=%s principal_id=%s remember=%s",
                authenticator.guard.value,
                principal.id,
                remember,
            )
            self._record(email, context, authenticator.guard, successful=True)
            return LoginResult(
                guard=authenticator.guard,
                destination=authenticator.destination,
                principal_id=principal.id,
            )

        guard, reason = first_match or (None, FailureReason.NOT_FOUND)
        logger.info(
            "Login failed: guard=%s reason=%s ip=%s",
            guard.value if guard else None,
            reason.value,
            context.ip_address,
        )
        self._record(email, context, guard, successful=False, failure_reason=reason)
        raise AuthenticationFailed()

    def _first_success(
        self, email: str, password: str
    ) -> tuple[Authenticator | None, Principal | None, tuple[GuardName, FailureReason] | None]:
        """
        Try authenticators in order and stop at the first success.

        Also returns (guard, reason) of the highest-priority table that knew the email.
        """
        first_match: tuple[GuardName, FailureReason] | None = None
        for authenticator in self._authenticators:
            principal, reason = authenticator.authenticate(email, password)
            if principal is not None:
                return authenticator, principal, first_match
            if first_match is None and reason is not FailureReason.NOT_FOUND:
                first_match = (authenticator.guard, reason)
        return None, None, first_match

    def _record(
        self,
        email: str,
        context: RequestContext,
        guard: GuardName | None,
        successful: bool,
        failure_reason: FailureReason | None = None,
    ) -> None:
        record_attempt(
            self._recorder,
            LoginAttemptRecord(
                email=email,
                ip_address=context.ip_address,
                user_agent=context.user_agent,
                guard=guard.value if guard else None,
                successful=successful,
                failure_reason=failure_reason.value if failure_reason else None,
            ),
        )
