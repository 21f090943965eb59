"""
Authentication and authorization.

Tokens say who the caller is, roles say what they may do, and the gate
enforces both on every request. The HTTP routes live in
onestay.auth.routes and are mounted by the application.
"""

from onestay.auth.context import AuthContext
from onestay.auth.gate import (
    AuthGate,
    ensure_owner,
    extract_credential,
    get_current_context,
    optional_context,
    require,
    require_tier,
)
from onestay.auth.passwords import hash_password, verify_password
from onestay.auth.roles import (
    BUILTIN_ROLES,
    Operation,
    RoleTier,
    check_tier,
    is_reserved_role,
    satisfies,
)
from onestay.auth.tokens import TokenClaims, TokenService

__all__ = [
    # Main interface
    "require",
    "require_tier",
    "get_current_context",
    "optional_context",
    "ensure_owner",
    "AuthContext",
    "AuthGate",
    "extract_credential",
    # Roles
    "BUILTIN_ROLES",
    "Operation",
    "RoleTier",
    "check_tier",
    "is_reserved_role",
    "satisfies",
    # Tokens
    "TokenClaims",
    "TokenService",
    "hash_password",
    "verify_password",
]
