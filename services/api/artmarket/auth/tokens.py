"""Access token issuing and verification (HS256 JWT)."""

import logging
import time
from collections.abc import Callable

import jwt

from artmarket.auth.schemas import TokenPayload
from artmarket.config import Settings
from artmarket.errors import ConfigurationError, InvalidToken

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenService:
    """
    Issues and verifies signed, time-bound identity tokens.

    Tokens are stateless: nothing is stored server side, so a token stays
    valid until it expires.
    """

    def __init__(
        self,
        secret: str | None,
        algorithm: str = "HS256",
        expires_in_seconds: int = 60 * 60 * 24,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in_seconds
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in_seconds=settings.access_token_expire_minutes * 60,
        )

    def _require_secret(self) -> str:
        if not self._secret:
            raise ConfigurationError("JWT secret not configured")
        return self._secret

    def issue(self, identity_id: str) -> str:
        """Sign a token whose subject is ``identity_id``."""
        now = int(self._clock())
        payload = {
            "sub": identity_id,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(payload, self._require_secret(), algorithm=self._algorithm)

    def verify(self, token: str) -> TokenPayload:
        """
        Validate a token and return its claims.

        Raises:
            InvalidToken: bad signature, malformed token, missing claims or
                expired.
        """
        secret = self._require_secret()
        try:
            # Expiry is checked against our own clock rather than PyJWT's
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.exceptions.PyJWTError as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidToken(str(e)) from e

        try:
            claims = TokenPayload(
                sub=str(payload["sub"]),
                iat=int(payload["iat"]),
                exp=int(payload["exp"]),
            )
        except (TypeError, ValueError) as e:
            raise InvalidToken("Malformed token claims") from e

        if claims.exp <= int(self._clock()):
            raise InvalidToken("Token has expired")
        return claims
