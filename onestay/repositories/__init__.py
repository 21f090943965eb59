"""
Repositories - typed access to storage collections.
"""

from onestay.repositories.base import Repository
from onestay.repositories.logements import LogementRepository
from onestay.repositories.properties import PropertyRepository
from onestay.repositories.roles import RoleRepository
from onestay.repositories.users import UserRepository, normalize_email

__all__ = [
    "Repository",
    "RoleRepository",
    "UserRepository",
    "PropertyRepository",
    "LogementRepository",
    "normalize_email",
]
