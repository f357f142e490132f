"""Authentication backend for session tokens and password handling.

This module provides core authentication utilities including:
- Password hashing with bcrypt
- Session token issuance and verification (HS256 JWT)

Token decoding never raises for bad input. It reports one of the
``TokenFailure`` reasons so callers can log precisely and still answer the
client with a single generic error.
"""

import hmac
import secrets
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwk, jwt
from jose.utils import base64url_encode
from passlib.context import CryptContext
from pydantic import ValidationError

from warden.config import get_settings
from warden.core.auth.schemas import SessionClaims, TokenFailure, TokenResult
from warden.core.constants import (
    SESSION_TOKEN_JTI_LENGTH,
    SESSION_TOKEN_TTL_HOURS,
    SESSION_TOKEN_TYPE,
)
from warden.core.identity.schemas import Identity


DEFAULT_SESSION_TTL = timedelta(hours=SESSION_TOKEN_TTL_HOURS)
DEFAULT_ALGORITHM = "HS256"


# ============================================================
# Password Utilities
# ============================================================


@lru_cache
def get_password_context() -> CryptContext:
    """Password hashing context using bcrypt."""
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=get_settings().bcrypt_rounds,
    )


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash of the password
    """
    return get_password_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    A digest that cannot be identified counts as a mismatch.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against

    Returns:
        True if password matches, False otherwise
    """
    try:
        return get_password_context().verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def dummy_verify() -> None:
    """Spend the same time as a real verification, for unknown users."""
    get_password_context().dummy_verify()


# ============================================================
# Session Token Utilities
# ============================================================


def _as_utc(moment: datetime | None) -> datetime:
    if moment is None:
        return datetime.now(UTC)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def _signature(signing_input: bytes, secret_key: str, algorithm: str) -> bytes:
    key = jwk.construct(secret_key, algorithm)
    return base64url_encode(key.sign(signing_input))


def issue_session_token(
    identity: Identity,
    secret_key: str,
    now: datetime | None = None,
    *,
    ttl: timedelta = DEFAULT_SESSION_TTL,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """Create a signed session token for an identity snapshot.

    Args:
        identity: The subject whose snapshot is embedded
        secret_key: Shared signing secret
        now: Issue time; defaults to the current UTC time
        ttl: Lifetime of the token
        algorithm: HMAC algorithm used for the signature

    Returns:
        Encoded JWT
    """
    issued_at = _as_utc(now)
    expires_at = issued_at + ttl

    to_encode = {
        "sub": str(identity.id),
        "username": identity.username,
        "email": identity.email,
        "status": identity.status.value,
        # Fractional seconds keep exp exactly issued_at + ttl
        "iat": issued_at.timestamp(),
        "exp": expires_at.timestamp(),
        "jti": secrets.token_urlsafe(SESSION_TOKEN_JTI_LENGTH),
        "type": SESSION_TOKEN_TYPE,
    }

    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_session_token(
    token: str,
    secret_key: str,
    now: datetime | None = None,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
) -> TokenResult:
    """Verify and decode a session token.

    Checks run in order: structure, signature, claims shape, expiry. A token
    needs at least three non-empty dot-separated segments to be looked at.
    The signature is then recomputed over everything before the last dot and
    compared with the final segment, so any altered byte that leaves the
    segments non-empty (a stray dot included) fails as ``INVALID_SIGNATURE``
    rather than surfacing as a parse error.

    Args:
        token: The bearer token string
        secret_key: Shared signing secret
        now: Evaluation time; defaults to the current UTC time
        algorithm: Expected HMAC algorithm

    Returns:
        TokenResult with claims, or with the failure reason
    """
    segments = token.split(".") if isinstance(token, str) else []
    if len(segments) < 3 or not all(segments):
        return TokenResult(failure=TokenFailure.MALFORMED)

    signing_input, _, signature_segment = token.rpartition(".")
    expected = _signature(signing_input.encode(), secret_key, algorithm)
    if not hmac.compare_digest(expected, signature_segment.encode()):
        return TokenResult(failure=TokenFailure.INVALID_SIGNATURE)

    # A valid signature over more than two segments is still not a JWS
    if len(segments) != 3:
        return TokenResult(failure=TokenFailure.MALFORMED)

    try:
        header = jwt.get_unverified_header(token)
        payload = jwt.get_unverified_claims(token)
    except JWTError:
        return TokenResult(failure=TokenFailure.MALFORMED)

    if header.get("alg") != algorithm or payload.get("type") != SESSION_TOKEN_TYPE:
        return TokenResult(failure=TokenFailure.MALFORMED)

    try:
        claims = SessionClaims(
            user_id=payload["sub"],
            username=payload["username"],
            email=payload["email"],
            status=payload["status"],
            issued_at=payload["iat"],
            expires_at=payload["exp"],
            jti=payload.get("jti"),
        )
    except (KeyError, ValidationError):
        return TokenResult(failure=TokenFailure.MALFORMED)

    if _as_utc(now) >= claims.expires_at:
        return TokenResult(failure=TokenFailure.EXPIRED)

    return TokenResult(claims=claims)
