"""Session credential models."""

from dataclasses import dataclass
from enum import StrEnum
from typing import NewType

from pydantic import BaseModel

AuthToken = NewType("AuthToken", str)

TOKEN_COOKIE_NAME = "token"


class Claims(BaseModel):
    """Identity claims carried inside a signed credential."""

    email: str
    iat: int
    exp: int


class RejectionReason(StrEnum):
    NO_TOKEN = "no_token"
    INVALID_TOKEN = "invalid_token"  # noqa: S105
    EXPIRED_TOKEN = "expired_token"  # noqa: S105


@dataclass(frozen=True)
class Authorized:
    claims: Claims


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason


AuthResult = Authorized | Rejected


class AuthContext(BaseModel):
    """Request-scoped authentication state attached by the access gate."""

    identity: Claims | None = None
