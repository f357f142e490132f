"""Authentication: password hashing, session tokens and the session manager.

FastAPI wiring lives in ``warden.core.auth.dependencies`` and
``warden.core.auth.routes``.
"""

from warden.core.auth.backend import (
    decode_session_token,
    hash_password,
    issue_session_token,
    verify_password,
)
from warden.core.auth.schemas import SessionClaims, TokenFailure, TokenResult
from warden.core.auth.service import SessionManager


__all__ = [
    "SessionClaims",
    # Service
    "SessionManager",
    "TokenFailure",
    "TokenResult",
    # Token utilities
    "decode_session_token",
    # Password utilities
    "hash_password",
    "issue_session_token",
    "verify_password",
]
