"""Session management: login, token validation, refresh and logout."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from warden.core.auth.backend import (
    DEFAULT_ALGORITHM,
    DEFAULT_SESSION_TTL,
    decode_session_token,
    dummy_verify,
    issue_session_token,
    verify_password,
)
from warden.core.errors import Denial, StoreUnavailableError
from warden.core.identity import Identity, IdentityStore


logger = structlog.get_logger()


def utc_now() -> datetime:
    return datetime.now(UTC)


class SessionManager:
    """Issues and validates session tokens against the identity store.

    Expected failures are returned as ``Denial`` values. Store outages are
    returned as ``store_unavailable`` denials and never retried.
    """

    def __init__(
        self,
        store: IdentityStore,
        *,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl
        self.clock = clock

    @property
    def expires_in(self) -> int:
        """Lifetime of issued tokens, in seconds."""
        return int(self.ttl.total_seconds())

    def _issue(self, identity: Identity) -> str:
        return issue_session_token(
            identity,
            self.secret_key,
            self.clock(),
            ttl=self.ttl,
            algorithm=self.algorithm,
        )

    async def authenticate(self, username: str, password: str) -> str | Denial:
        """Verify a login name and password and issue a session token.

        An unknown login name and a wrong password produce the same denial.

        Args:
            username: Login name (case-sensitive)
            password: Plain text password

        Returns:
            A session token, or an invalid_credentials / store_unavailable denial
        """
        try:
            user = await self.store.find_user_by_login(username)
        except StoreUnavailableError:
            logger.error("store_unavailable", operation="authenticate")
            return Denial.store_unavailable("authenticate")

        if user is None:
            dummy_verify()
            logger.info("login_failed")
            return Denial.invalid_credentials()

        if not verify_password(password, user.password_hash):
            logger.info("login_failed")
            return Denial.invalid_credentials()

        logger.info("login_succeeded", user_id=str(user.id))
        return self._issue(user.to_identity())

    async def validate(self, token: str) -> Identity | Denial:
        """Resolve a session token to the user's current identity.

        The identity is re-read from the store so status changes since the
        token was issued are visible, and deleted users are rejected.

        Args:
            token: The bearer token, passed through unmodified

        Returns:
            The current Identity, or an unauthenticated / store_unavailable denial
        """
        result = decode_session_token(
            token, self.secret_key, self.clock(), algorithm=self.algorithm
        )
        if result.claims is None:
            reason = result.failure.value if result.failure else None
            logger.info("token_rejected", reason=reason)
            return Denial.unauthenticated(reason)

        try:
            user = await self.store.find_user_by_id(result.claims.user_id)
        except StoreUnavailableError:
            logger.error("store_unavailable", operation="validate")
            return Denial.store_unavailable("validate")

        if user is None:
            logger.info(
                "token_rejected",
                reason="unknown_user",
                user_id=str(result.claims.user_id),
            )
            return Denial.unauthenticated("unknown_user")

        return user.to_identity()

    async def refresh(self, token: str) -> str | Denial:
        """Issue a new token from a still-valid one.

        The new claims come from the store, not from the old token.

        Args:
            token: The current bearer token

        Returns:
            A new session token, or the denial from validation
        """
        identity = await self.validate(token)
        if isinstance(identity, Denial):
            return identity

        logger.info("session_refreshed", user_id=str(identity.id))
        return self._issue(identity)

    async def logout(self, token: str | None) -> None:  # noqa: ARG002
        """End a session from the client's point of view.

        Tokens are not revocable; an issued token stays valid until it
        expires. This always succeeds and changes nothing server-side.
        """
        logger.info("logout")
