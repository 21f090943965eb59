"""User collection."""

from __future__ import annotations

from onestay.core.models import User
from onestay.repositories.base import Repository
from onestay.storage import Collections


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(Repository[User]):
    collection = Collections.USERS
    model = User

    async def find_by_email(self, email: str) -> User | None:
        return await self.find_one(email=normalize_email(email))

    async def email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        user = await self.find_by_email(email)
        return user is not None and user.id != exclude_id

    async def list_all(self) -> list[User]:
        return await self.find_many(limit=None, order_by="created_at")
