"""Signing and verification of session credentials (HS256 JWT)."""

from datetime import datetime, timedelta
from typing import Any

import jwt

from foodgarden.core.modules.session.models import (
    AuthResult,
    AuthToken,
    Authorized,
    Claims,
    Rejected,
    RejectionReason,
)
from foodgarden.utils import now

JWT_ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(hours=2)


def issue_token(*, secret: str, email: str, issued_at: datetime | None = None) -> AuthToken:
    """Sign a credential for `email` that expires TOKEN_LIFETIME after `issued_at`."""
    issued_at = issued_at or now()
    payload: dict[str, Any] = {
        "email": email,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + TOKEN_LIFETIME).timestamp()),
    }
    return AuthToken(jwt.encode(payload, secret, algorithm=JWT_ALGORITHM))


def verify_token(*, token: str | None, secret: str) -> AuthResult:
    """Check signature and expiry of a credential.

    The signature is verified before expiry, so a forged token that is also
    expired is reported as invalid.
    """
    if not token:
        return Rejected(RejectionReason.NO_TOKEN)
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM], options={"require": ["exp", "iat"]})
    except jwt.ExpiredSignatureError:
        return Rejected(RejectionReason.EXPIRED_TOKEN)
    except jwt.InvalidTokenError:
        return Rejected(RejectionReason.INVALID_TOKEN)

    email = payload.get("email")
    if not isinstance(email, str) or not email:
        return Rejected(RejectionReason.INVALID_TOKEN)
    return Authorized(Claims(email=email, iat=payload["iat"], exp=payload["exp"]))
