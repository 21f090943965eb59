"""
Auth context - who is making the request.

Built by the auth gate from a validated token and handed to route handlers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from onestay.auth.roles import RoleTier, satisfies
from onestay.auth.tokens import TokenClaims


@dataclass(frozen=True)
class AuthContext:
    """
    Identity of the caller.

    Usage in routes:
        async def my_route(ctx: AuthContext = Depends(require(Operation.USER_LIST))):
            print(f"User {ctx.subject_id} with role {ctx.role_id}")
    """

    subject_id: str | None = None
    email: str | None = None
    role_id: str | None = None
    expires_at: datetime | None = None

    @classmethod
    def anonymous(cls) -> AuthContext:
        return cls()

    @classmethod
    def from_claims(cls, claims: TokenClaims, role_id: str | None = None) -> AuthContext:
        """Build from token claims, optionally overriding the role."""
        return cls(
            subject_id=claims.sub,
            email=claims.email,
            role_id=role_id if role_id is not None else claims.role_id,
            expires_at=claims.exp,
        )

    @property
    def is_authenticated(self) -> bool:
        return self.subject_id is not None

    @property
    def is_anonymous(self) -> bool:
        return self.subject_id is None

    @property
    def is_admin(self) -> bool:
        return bool(self.role_id) and satisfies(self.role_id, RoleTier.ADMIN)

    @property
    def is_super_admin(self) -> bool:
        return bool(self.role_id) and satisfies(self.role_id, RoleTier.SUPER_ADMIN)

    def owns(self, owner_id: str | None) -> bool:
        """Is the caller the given owner?"""
        return self.subject_id is not None and self.subject_id == owner_id
