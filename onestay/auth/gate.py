"""
Auth gate - the interface between HTTP requests and authorization.

Every protected route declares what it needs with a single dependency:

    ctx: AuthContext = Depends(require(Operation.USER_LIST))

Per request the gate walks:

    extract credential -> validate token -> classify role -> proceed

and fails with MissingToken, InvalidToken, RoleMissing or Forbidden. The
handler only runs once the gate has produced an AuthContext.

Ownership is the one check that needs the target entity, so it is not a
dependency: handlers call ensure_owner() after loading the entity.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Mapping

from fastapi import Request

from onestay.auth.context import AuthContext
from onestay.auth.roles import Operation, RoleTier, check_tier, tier_for
from onestay.auth.tokens import TokenService
from onestay.core.errors import Forbidden, InvalidToken, MissingToken

if TYPE_CHECKING:
    from onestay.repositories import UserRepository

logger = logging.getLogger(__name__)

ROLE_SOURCE_TOKEN = "token"
ROLE_SOURCE_STORAGE = "storage"


# =============================================================================
# Credential Extraction
# =============================================================================


def extract_credential(headers: Mapping[str, str]) -> str | None:
    """
    Find the token in request headers.

    1. `Authorization: Bearer <token>` (scheme matched case-insensitively)
    2. A raw `Bearer: <token>` header, which one older client sends
    3. None
    """
    lowered = {key.lower(): value for key, value in headers.items()}

    authorization = lowered.get("authorization", "").strip()
    if authorization:
        parts = authorization.split(None, 1)
        if len(parts) == 2 and parts[0].lower() == "bearer":
            token = parts[1].strip()
            if token:
                return token

    raw = lowered.get("bearer", "").strip()
    return raw or None


# =============================================================================
# Gate
# =============================================================================


class AuthGate:
    """
    Turns request headers into an AuthContext.

    With role_source="token" (default) the gate never touches storage: the
    role is the one embedded in the token at login, so a role change takes
    effect at the user's next login. With role_source="storage" the user's
    current role is read on every request and a deleted user is rejected.
    """

    def __init__(
        self,
        tokens: TokenService,
        role_source: str = ROLE_SOURCE_TOKEN,
        users: UserRepository | None = None,
    ):
        if role_source == ROLE_SOURCE_STORAGE and users is None:
            raise ValueError("role_source='storage' needs a user repository")
        self.tokens = tokens
        self.role_source = role_source
        self.users = users

    async def authenticate(self, headers: Mapping[str, str]) -> AuthContext:
        """
        Require a valid credential.

        Raises:
            MissingToken: no credential in either header
            InvalidToken: credential rejected (or user gone, in storage mode)
        """
        token = extract_credential(headers)
        if token is None:
            raise MissingToken()

        claims = self.tokens.validate(token)

        if self.role_source == ROLE_SOURCE_STORAGE:
            user = await self.users.find_by_id(claims.sub)
            if user is None:
                logger.info("Token presented for deleted user %s", claims.sub)
                raise InvalidToken()
            return AuthContext.from_claims(claims, role_id=user.role_id)

        return AuthContext.from_claims(claims)

    async def authenticate_optional(self, headers: Mapping[str, str]) -> AuthContext:
        """Like authenticate(), but anonymous instead of failing."""
        try:
            return await self.authenticate(headers)
        except (MissingToken, InvalidToken):
            return AuthContext.anonymous()

    async def authorize(self, headers: Mapping[str, str], tier: RoleTier) -> AuthContext:
        """Authenticate, then enforce a tier (RoleMissing / Forbidden)."""
        ctx = await self.authenticate(headers)
        check_tier(ctx.role_id, tier)
        return ctx


def ensure_owner(ctx: AuthContext, owner_id: str | None) -> None:
    """Raise Forbidden unless the caller owns the entity."""
    if not ctx.owns(owner_id):
        raise Forbidden("You are not the owner of this resource")


# =============================================================================
# FastAPI Dependencies
# =============================================================================


def get_gate(request: Request) -> AuthGate:
    return request.app.state.gate


async def get_current_context(request: Request) -> AuthContext:
    """Any authenticated caller."""
    return await get_gate(request).authenticate(request.headers)


async def optional_context(request: Request) -> AuthContext:
    """Authenticated caller if a valid token is present, anonymous otherwise."""
    return await get_gate(request).authenticate_optional(request.headers)


def require_tier(tier: RoleTier) -> Callable:
    """
    Require a minimum tier.

    Usage:
        @router.get("/roles")
        async def list_roles(ctx: AuthContext = Depends(require_tier(RoleTier.ADMIN))):
            ...
    """

    async def dependency(request: Request) -> AuthContext:
        return await get_gate(request).authorize(request.headers, tier)

    return dependency


def require(operation: Operation | str) -> Callable:
    """Require whatever tier the operation table assigns to `operation`."""
    return require_tier(tier_for(operation))
