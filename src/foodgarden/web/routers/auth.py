from typing import Any, Literal

from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from foodgarden.config import Config
from foodgarden.core.modules.session.models import TOKEN_COOKIE_NAME
from foodgarden.web.deps import AppDep, ConfigDep
from foodgarden.web.openapi import ErrorResponse, MessageResponse

router = APIRouter(tags=["auth"])


class TokenRequest(BaseModel):
    """Login request carrying the identity claim."""

    email: str | None = Field(None, description="Email to encode in the session token")


def cookie_flags(config: Config) -> dict[str, Any]:
    """Cookie attributes shared by issuance and logout.

    Production serves a cross-site frontend, so the cookie must be Secure with
    SameSite=None; development keeps it strict over plain HTTP.
    """
    samesite: Literal["none", "strict"] = "none" if config.production else "strict"
    return {"httponly": True, "secure": config.production, "samesite": samesite, "path": "/"}


@router.post(
    "/jwt",
    summary="Issue session token",
    description="Sign a 2-hour session token for the given email and set it as an httpOnly cookie.",
    operation_id="issueToken",
    responses={
        200: {"description": "Token issued and cookie set"},
        400: {"model": ErrorResponse, "description": "Missing email"},
    },
)
async def issue_token(request: TokenRequest, app: AppDep, config: ConfigDep, response: Response) -> MessageResponse:
    token = app.issue_token(request.email)
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        max_age=int(app.token_lifetime.total_seconds()),
        **cookie_flags(config),
    )
    return MessageResponse(message="Token issued")


@router.post(
    "/logout",
    summary="Clear session cookie",
    description="Instruct the client to discard the session cookie. Always succeeds.",
    operation_id="logout",
    responses={200: {"description": "Cookie cleared"}},
)
async def logout(config: ConfigDep, response: Response) -> MessageResponse:
    response.delete_cookie(TOKEN_COOKIE_NAME, **cookie_flags(config))
    return MessageResponse(message="Logged out")
