"""
Services - business rules per entity.

Services raise domain errors (onestay.core.errors) and never build HTTP
responses. Services bundles one instance of each, built from a storage
backend and the settings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from onestay.core.slugs import SlugAllocator
from onestay.repositories import (
    LogementRepository,
    PropertyRepository,
    RoleRepository,
    UserRepository,
)
from onestay.services.logements import LogementCreate, LogementService
from onestay.services.properties import PropertyCreate, PropertyService, PropertyUpdate
from onestay.services.roles import RoleCreate, RoleService
from onestay.services.users import ProfileUpdate, UserCreate, UserService, UserUpdate

if TYPE_CHECKING:
    from onestay.config import Settings
    from onestay.storage import MetadataStorage


@dataclass
class Services:
    roles: RoleService
    users: UserService
    properties: PropertyService
    logements: LogementService

    @classmethod
    def build(cls, storage: MetadataStorage, settings: Settings) -> Services:
        role_repo = RoleRepository(storage)
        user_repo = UserRepository(storage)
        property_repo = PropertyRepository(storage)
        logement_repo = LogementRepository(storage)

        return cls(
            roles=RoleService(role_repo),
            users=UserService(user_repo, role_repo, property_repo, logement_repo),
            properties=PropertyService(
                property_repo,
                SlugAllocator(max_attempts=settings.slug_max_attempts),
            ),
            logements=LogementService(logement_repo),
        )


__all__ = [
    "Services",
    "RoleService",
    "RoleCreate",
    "UserService",
    "UserCreate",
    "UserUpdate",
    "ProfileUpdate",
    "PropertyService",
    "PropertyCreate",
    "PropertyUpdate",
    "LogementService",
    "LogementCreate",
]
