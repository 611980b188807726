from foodgarden.core.core import Service
from foodgarden.core.modules.session.models import AuthContext, Claims
from foodgarden.errors import AuthenticationError


class AccessService(Service):
    async def ensure_authenticated(self, auth: AuthContext) -> Claims:
        """Return the identity attached by the access gate, or raise AuthenticationError."""
        if auth.identity is None:
            raise AuthenticationError("Unauthorized, no token found", reason="no_token")
        return auth.identity
