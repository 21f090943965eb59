# =============================================================================
# Identity Tokens
# =============================================================================
#
# Signed, time-limited JWTs carrying who the caller is:
#   sub      - user id
#   role_id  - role at the time of login
#   email    - informational, never re-checked against storage
#   iat/exp  - issue and expiry timestamps
#
# Tokens are stateless. There is no revocation list: a token is accepted
# until it expires, as long as its signature verifies.
#
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable

import jwt
from pydantic import BaseModel, ValidationError

from onestay.core.errors import InvalidToken, OneStayError
from onestay.core.utils import utc_now

if TYPE_CHECKING:
    from onestay.config import Settings

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "role_id", "email", "iat", "exp"]


class TokenClaims(BaseModel):
    """Validated token payload."""

    sub: str  # user_id
    role_id: str
    email: str
    iat: datetime
    exp: datetime

    @property
    def subject_id(self) -> str:
        return self.sub


class TokenService:
    """
    Issue and validate identity tokens.

    Pure: the secret, algorithm and lifetime are fixed at construction and
    nothing else is read or written. Build one per process from settings:

        tokens = TokenService.from_settings(settings)
        token = tokens.issue(user.id, user.role_id, user.email)
        claims = tokens.validate(token)   # raises InvalidToken
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenService:
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(minutes=settings.jwt_access_token_expire_minutes),
        )

    def issue(self, subject_id: str, role_id: str, email: str) -> str:
        """Create a signed token for the given identity."""
        now = self._clock()
        payload = {
            "sub": subject_id,
            "role_id": role_id,
            "email": email,
            "iat": now,
            "exp": now + self.ttl,
        }

        try:
            return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            logger.exception("Token signing failed")
            raise OneStayError("Could not generate token") from e

    def validate(self, token: str) -> TokenClaims:
        """
        Decode and verify a token.

        Raises:
            InvalidToken: bad signature, malformed, missing claims or expired
        """
        now = self._clock()
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS, "verify_exp": False},
            )
            claims = TokenClaims(
                sub=payload["sub"],
                role_id=str(payload["role_id"]),
                email=payload["email"],
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (jwt.InvalidTokenError, ValidationError, TypeError, ValueError, OverflowError) as e:
            logger.debug("Rejected token: %s", e)
            raise InvalidToken() from e

        # Expiry is checked against our clock rather than PyJWT's so that
        # an injected clock governs issue and validation alike.
        if claims.exp <= now:
            logger.debug("Rejected expired token for %s", claims.sub)
            raise InvalidToken()

        return claims
