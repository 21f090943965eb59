"""
Roles, tiers and the operation table.

This defines WHO may do WHAT. The checking happens in gate.py.

Roles are identified by small decimal strings. Four are built in and can
never be deleted; any role beyond them is a STANDARD-tier role.
"""

from __future__ import annotations

from enum import Enum

from onestay.core.errors import Forbidden, RoleMissing


# =============================================================================
# Built-in Roles
# =============================================================================


ROLE_ID_CLIENT = "1"
ROLE_ID_LOUEUR = "2"  # Landlord / host
ROLE_ID_ADMIN = "3"
ROLE_ID_SUPER_ADMIN = "4"

ROLE_SLUG_CLIENT = "client"
ROLE_SLUG_LOUEUR = "loueur"
ROLE_SLUG_ADMIN = "admin"
ROLE_SLUG_SUPER_ADMIN = "superadmin"

# (id, name, slug) in seeding order
BUILTIN_ROLES: list[tuple[str, str, str]] = [
    (ROLE_ID_CLIENT, "Client", ROLE_SLUG_CLIENT),
    (ROLE_ID_LOUEUR, "Loueur", ROLE_SLUG_LOUEUR),
    (ROLE_ID_ADMIN, "Admin", ROLE_SLUG_ADMIN),
    (ROLE_ID_SUPER_ADMIN, "Super Admin", ROLE_SLUG_SUPER_ADMIN),
]

RESERVED_ROLE_IDS = frozenset(role_id for role_id, _, _ in BUILTIN_ROLES)
RESERVED_ROLE_SLUGS = frozenset(slug for _, _, slug in BUILTIN_ROLES)

# Custom role ids continue after the highest built-in one
ROLE_ID_FLOOR = max(int(role_id) for role_id in RESERVED_ROLE_IDS)


def is_reserved_role(role_id: str | None = None, slug: str | None = None) -> bool:
    """True for the built-in roles, matched by id or slug."""
    return role_id in RESERVED_ROLE_IDS or slug in RESERVED_ROLE_SLUGS


# =============================================================================
# Tiers
# =============================================================================


class RoleTier(str, Enum):
    """Authorization level required by an operation."""

    STANDARD = "standard"        # Any authenticated user
    ADMIN = "admin"              # Admin or super admin
    SUPER_ADMIN = "super_admin"  # Super admin only


TIER_ROLE_IDS: dict[RoleTier, frozenset[str]] = {
    RoleTier.ADMIN: frozenset({ROLE_ID_ADMIN, ROLE_ID_SUPER_ADMIN}),
    RoleTier.SUPER_ADMIN: frozenset({ROLE_ID_SUPER_ADMIN}),
}


def satisfies(role_id: str, tier: RoleTier) -> bool:
    """Does a role id meet a tier? Ids are compared as opaque strings."""
    if tier == RoleTier.STANDARD:
        return True
    return role_id in TIER_ROLE_IDS[tier]


def check_tier(role_id: str | None, tier: RoleTier) -> None:
    """
    Enforce a tier.

    Raises:
        RoleMissing: no role id at all
        Forbidden: role does not meet the tier
    """
    if not role_id:
        raise RoleMissing()
    if not satisfies(role_id, tier):
        raise Forbidden(_FORBIDDEN_DETAIL[tier])


_FORBIDDEN_DETAIL = {
    RoleTier.ADMIN: "Access reserved to administrators",
    RoleTier.SUPER_ADMIN: "Access reserved to super administrators",
}


# =============================================================================
# Operations
# =============================================================================


class Operation(str, Enum):
    """Gated operations."""

    # Roles
    ROLE_LIST = "role.list"
    ROLE_CREATE = "role.create"
    ROLE_DELETE = "role.delete"

    # Users
    USER_REGISTER = "user.register"
    USER_LIST = "user.list"
    USER_UPDATE_ANY = "user.update_any"
    USER_DELETE_ANY = "user.delete_any"
    PROFILE_VIEW = "profile.view"
    PROFILE_UPDATE = "profile.update"
    PROFILE_DELETE = "profile.delete"

    # Listings (ownership is checked separately)
    PROPERTY_CREATE = "property.create"
    PROPERTY_UPDATE = "property.update"
    PROPERTY_PUBLISH = "property.publish"
    PROPERTY_DELETE = "property.delete"
    LOGEMENT_CREATE = "logement.create"


OPERATION_TIERS: dict[Operation, RoleTier] = {
    Operation.ROLE_LIST: RoleTier.ADMIN,
    Operation.ROLE_CREATE: RoleTier.SUPER_ADMIN,
    Operation.ROLE_DELETE: RoleTier.SUPER_ADMIN,

    Operation.USER_REGISTER: RoleTier.ADMIN,
    Operation.USER_LIST: RoleTier.ADMIN,
    Operation.USER_UPDATE_ANY: RoleTier.ADMIN,
    Operation.USER_DELETE_ANY: RoleTier.ADMIN,
    Operation.PROFILE_VIEW: RoleTier.STANDARD,
    Operation.PROFILE_UPDATE: RoleTier.STANDARD,
    Operation.PROFILE_DELETE: RoleTier.STANDARD,

    Operation.PROPERTY_CREATE: RoleTier.STANDARD,
    Operation.PROPERTY_UPDATE: RoleTier.STANDARD,
    Operation.PROPERTY_PUBLISH: RoleTier.STANDARD,
    Operation.PROPERTY_DELETE: RoleTier.STANDARD,
    Operation.LOGEMENT_CREATE: RoleTier.STANDARD,
}


def tier_for(operation: Operation | str) -> RoleTier:
    """Tier required by an operation."""
    return OPERATION_TIERS[Operation(operation)]
