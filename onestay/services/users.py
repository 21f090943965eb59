"""
User accounts.

Registration is an admin operation; there is no self sign-up. Deleting a
user also deletes every listing they own.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, EmailStr, Field

from onestay.auth.passwords import hash_password, verify_password
from onestay.auth.roles import ROLE_ID_CLIENT
from onestay.core.errors import BadRequest, DuplicateName, InvalidCredentials, NotFound
from onestay.core.models import Role, ShortName, User, UserWithRole
from onestay.core.utils import utc_now
from onestay.repositories import (
    LogementRepository,
    PropertyRepository,
    RoleRepository,
    UserRepository,
    normalize_email,
)
from onestay.storage import DuplicateKeyError

logger = logging.getLogger(__name__)


# =============================================================================
# Input Models
# =============================================================================


class UserCreate(BaseModel):
    first_name: ShortName
    last_name: ShortName
    email: EmailStr
    password: str = Field(min_length=6)
    role_id: str = ROLE_ID_CLIENT


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own account."""

    first_name: ShortName | None = None
    last_name: ShortName | None = None
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6)


class UserUpdate(ProfileUpdate):
    """Admin update: may also change the role."""

    role_id: str | None = None


# =============================================================================
# Service
# =============================================================================


class UserService:
    def __init__(
        self,
        users: UserRepository,
        roles: RoleRepository,
        properties: PropertyRepository,
        logements: LogementRepository,
    ):
        self.users = users
        self.roles = roles
        self.properties = properties
        self.logements = logements

    async def _role_or_placeholder(self, role_id: str) -> Role:
        role = await self.roles.find_by_id(role_id)
        return role if role is not None else Role.unknown(role_id)

    async def _require_role(self, role_id: str) -> None:
        if not await self.roles.exists(role_id):
            raise BadRequest(f"Unknown role: {role_id}")

    async def register(self, data: UserCreate) -> User:
        await self._require_role(data.role_id)

        email = normalize_email(data.email)
        if await self.users.email_taken(email):
            raise DuplicateName("Email already registered")

        user = User(
            first_name=data.first_name,
            last_name=data.last_name,
            email=email,
            password_hash=hash_password(data.password),
            role_id=data.role_id,
        )
        try:
            await self.users.insert(user)
        except DuplicateKeyError as e:
            raise DuplicateName("Email already registered") from e

        logger.info("Registered user %s with role %s", user.id, user.role_id)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Check login credentials.

        Unknown email and wrong password fail the same way.
        """
        user = await self.users.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentials()
        return user

    async def get_user(self, user_id: str) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFound.for_resource("User")
        return user

    async def get_profile(self, user_id: str) -> UserWithRole:
        user = await self.get_user(user_id)
        return UserWithRole.from_user(user, await self._role_or_placeholder(user.role_id))

    async def list_users(self) -> list[UserWithRole]:
        users = await self.users.list_all()
        roles = {role.id: role for role in await self.roles.list_all()}
        return [
            UserWithRole.from_user(user, roles.get(user.role_id) or Role.unknown(user.role_id))
            for user in users
        ]

    async def update_user(self, user_id: str, data: ProfileUpdate) -> User:
        """Partial update. Only UserUpdate carries a role change."""
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise BadRequest("No fields to update")

        user = await self.get_user(user_id)

        updates: dict = {}
        for field in ("first_name", "last_name"):
            if field in changes:
                updates[field] = changes[field]

        if "email" in changes:
            email = normalize_email(changes["email"])
            if await self.users.email_taken(email, exclude_id=user.id):
                raise DuplicateName("Email already registered")
            updates["email"] = email

        if "password" in changes:
            updates["password_hash"] = hash_password(changes["password"])

        if "role_id" in changes:
            await self._require_role(changes["role_id"])
            updates["role_id"] = changes["role_id"]

        updates["updated_at"] = utc_now().isoformat()
        try:
            await self.users.update(user.id, updates)
        except DuplicateKeyError as e:
            raise DuplicateName("Email already registered") from e

        logger.info("Updated user %s (%s)", user.id, ", ".join(sorted(changes)))
        return await self.get_user(user.id)

    async def delete_user(self, user_id: str) -> None:
        """Delete a user and every listing they own."""
        user = await self.get_user(user_id)

        properties = await self.properties.delete_by_host(user.id)
        logements = await self.logements.delete_by_owner(user.id)
        await self.users.delete(user.id)

        logger.info(
            "Deleted user %s with %d properties and %d logements",
            user.id, properties, logements,
        )

    async def ensure_user(
        self,
        email: str,
        password: str,
        role_id: str,
        first_name: str = "Super",
        last_name: str = "Admin",
    ) -> tuple[User, bool]:
        """Get or create an account by email. Returns (user, created)."""
        existing = await self.users.find_by_email(email)
        if existing is not None:
            return existing, False

        user = await self.register(UserCreate(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            role_id=role_id,
        ))
        return user, True
