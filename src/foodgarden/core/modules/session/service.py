import structlog

from foodgarden.core.core import Service
from foodgarden.core.modules.session.models import AuthResult, AuthToken, Rejected
from foodgarden.core.modules.session.tokens import TOKEN_LIFETIME, issue_token, verify_token
from foodgarden.errors import ValidationError

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues session credentials and verifies them for the access gate.

    Stateless: nothing is written to the store, so logout is purely a
    cookie removal on the client.
    """

    token_lifetime = TOKEN_LIFETIME

    @property
    def _secret(self) -> str:
        return self.core.config.jwt_secret

    def issue(self, email: str | None) -> AuthToken:
        if email is None or not email.strip():
            raise ValidationError("Email is required")
        email = email.strip()
        token = issue_token(secret=self._secret, email=email)
        logger.info("token_issued", email=email)
        return token

    def authorize(self, token: str | None) -> AuthResult:
        result = verify_token(token=token, secret=self._secret)
        if isinstance(result, Rejected):
            logger.debug("token_rejected", reason=result.reason.value)
        return result
