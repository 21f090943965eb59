"""
Core data models for the OneStay backend.

These are the documents persisted in storage: roles, users, properties and
the legacy "logement" listings. Input shapes live in the services that
accept them; response envelopes next to the routes.
"""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Annotated, Any

from pydantic import BaseModel, Field, StringConstraints

from onestay.core.sections import (
    BabyKids,
    CamelModel,
    CheckInOut,
    Contacts,
    Emergency,
    Entertainment,
    Equipment,
    Instructions,
    LocalRecommendations,
    Neighborhood,
    Outdoor,
    Parking,
    Pets,
    Rules,
    Security,
    Services,
    Transport,
    Wifi,
)
from onestay.core.utils import generate_id, utc_now

# Input text is stripped before the length checks, so blank values are rejected
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
ShortName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
ListingName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


# =============================================================================
# Enums
# =============================================================================


class ListingStatus(IntEnum):
    """Visibility of a property or logement."""

    DRAFT = 1  # Only the owner sees it
    PUBLISHED = 2  # Visible to everyone


# =============================================================================
# Role
# =============================================================================


class Role(BaseModel):
    """An authorization tier. Ids are small decimal strings ("1".."4" built in)."""

    id: str
    name: str
    slug: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def unknown(cls, role_id: str) -> Role:
        """Placeholder for a user whose role no longer exists."""
        return cls(id=role_id, name="Unknown role", slug="unknown")


# =============================================================================
# User
# =============================================================================


class User(BaseModel):
    """A user account as stored. Never returned as-is (carries the hash)."""

    id: str = Field(default_factory=lambda: generate_id("user"))
    first_name: str
    last_name: str
    email: str
    password_hash: str
    role_id: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class UserProfile(BaseModel):
    """User data returned to clients (no sensitive fields)."""

    id: str
    first_name: str
    last_name: str
    email: str
    role_id: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> UserProfile:
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            role_id=user.role_id,
            created_at=user.created_at,
        )


class UserWithRole(BaseModel):
    """User data with the full role embedded."""

    id: str
    first_name: str
    last_name: str
    email: str
    role: Role
    created_at: datetime

    @classmethod
    def from_user(cls, user: User, role: Role) -> UserWithRole:
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            role=role,
            created_at=user.created_at,
        )


# =============================================================================
# Property
# =============================================================================


class PropertyDetails(CamelModel):
    """Host-editable content of a property, shared by create requests and documents."""

    description: str | None = None
    zip_code: str | None = None
    images: list[str] = Field(default_factory=list)

    check_in_out: CheckInOut = Field(default_factory=CheckInOut)
    wifi: Wifi = Field(default_factory=Wifi)
    equipment: Equipment = Field(default_factory=Equipment)
    instructions: Instructions = Field(default_factory=Instructions)
    rules: Rules = Field(default_factory=Rules)
    contacts: Contacts = Field(default_factory=Contacts)
    local_recommendations: LocalRecommendations = Field(default_factory=LocalRecommendations)
    parking: Parking = Field(default_factory=Parking)
    transport: Transport = Field(default_factory=Transport)
    security: Security = Field(default_factory=Security)
    services: Services = Field(default_factory=Services)
    baby_kids: BabyKids = Field(default_factory=BabyKids)
    pets: Pets = Field(default_factory=Pets)
    entertainment: Entertainment = Field(default_factory=Entertainment)
    outdoor: Outdoor = Field(default_factory=Outdoor)
    neighborhood: Neighborhood = Field(default_factory=Neighborhood)
    emergency: Emergency = Field(default_factory=Emergency)


class Property(PropertyDetails):
    """
    A rental property.

    Owned by exactly one host. `slug` is unique across all properties,
    `name` is unique per host.
    """

    id: str = Field(default_factory=lambda: generate_id("prop"))
    host_id: str
    status: ListingStatus = ListingStatus.DRAFT
    slug: str
    name: str
    address: str
    city: str
    country: str

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    published_at: datetime | None = None

    @property
    def is_draft(self) -> bool:
        return self.status == ListingStatus.DRAFT


# =============================================================================
# Logement (legacy listing)
# =============================================================================


class Logement(BaseModel):
    """
    Legacy listing type, kept for clients of the first API version.

    Field names follow that API (French). `nom_bien` is unique per owner.
    """

    id: str = Field(default_factory=lambda: generate_id("log"))
    nom_bien: str
    description: str
    adresse: str
    ville: str
    pays: str
    user_id: str
    status: ListingStatus = ListingStatus.DRAFT
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


def to_document(model: BaseModel) -> dict[str, Any]:
    """Serialize a model for storage (snake_case keys, JSON-safe values)."""
    return model.model_dump(mode="json")
