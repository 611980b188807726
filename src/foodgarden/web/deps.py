from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from foodgarden.app import App
from foodgarden.config import Config
from foodgarden.core.modules.session.models import TOKEN_COOKIE_NAME, AuthContext, Rejected, RejectionReason
from foodgarden.errors import AuthenticationError

cookie_scheme = APIKeyCookie(name=TOKEN_COOKIE_NAME, scheme_name="TokenCookie", auto_error=False)

REJECTION_MESSAGES = {
    RejectionReason.NO_TOKEN: "Unauthorized, no token found",
    RejectionReason.INVALID_TOKEN: "Invalid token",
    RejectionReason.EXPIRED_TOKEN: "Token has expired",
}


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


async def get_auth_context(
    request: Request,
    app: Annotated[App, Depends(get_app)],
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> AuthContext:
    """Access gate: verify the session cookie, or reject the request with 401."""
    result = app.authorize(token_cookie)
    if isinstance(result, Rejected):
        raise AuthenticationError(REJECTION_MESSAGES[result.reason], reason=result.reason.value)

    auth = AuthContext(identity=result.claims)
    request.state.auth = auth
    return auth


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
AuthDep = Annotated[AuthContext, Depends(get_auth_context)]
