"""
User routes.

    POST   /users/register  - create an account        (admin)
    GET    /users/profile   - own profile
    PUT    /users/profile   - update own profile
    DELETE /users/profile   - delete own account
    GET    /users           - list users               (admin)
    PUT    /users/{id}      - update any user          (admin)
    DELETE /users/{id}      - delete any user          (admin)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from onestay.api.deps import get_services
from onestay.auth.context import AuthContext
from onestay.auth.gate import require
from onestay.auth.roles import Operation
from onestay.core.models import UserProfile, UserWithRole
from onestay.services import ProfileUpdate, Services, UserCreate, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


class UserResponse(BaseModel):
    message: str
    user: UserProfile


class ProfileResponse(BaseModel):
    user: UserWithRole


class UserListResponse(BaseModel):
    users: list[UserWithRole]
    count: int


class MessageResponse(BaseModel):
    message: str


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    ctx: AuthContext = Depends(require(Operation.USER_REGISTER)),
    services: Services = Depends(get_services),
):
    user = await services.users.register(data)
    return UserResponse(message="Account created", user=UserProfile.from_user(user))


# =============================================================================
# Own Profile
# =============================================================================


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    ctx: AuthContext = Depends(require(Operation.PROFILE_VIEW)),
    services: Services = Depends(get_services),
):
    return ProfileResponse(user=await services.users.get_profile(ctx.subject_id))


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    ctx: AuthContext = Depends(require(Operation.PROFILE_UPDATE)),
    services: Services = Depends(get_services),
):
    user = await services.users.update_user(ctx.subject_id, data)
    return UserResponse(message="Profile updated", user=UserProfile.from_user(user))


@router.delete("/profile", response_model=MessageResponse)
async def delete_profile(
    ctx: AuthContext = Depends(require(Operation.PROFILE_DELETE)),
    services: Services = Depends(get_services),
):
    await services.users.delete_user(ctx.subject_id)
    return MessageResponse(message="Account deleted")


# =============================================================================
# Administration
# =============================================================================


@router.get("", response_model=UserListResponse)
async def list_users(
    ctx: AuthContext = Depends(require(Operation.USER_LIST)),
    services: Services = Depends(get_services),
):
    users = await services.users.list_users()
    return UserListResponse(users=users, count=len(users))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    ctx: AuthContext = Depends(require(Operation.USER_UPDATE_ANY)),
    services: Services = Depends(get_services),
):
    user = await services.users.update_user(user_id, data)
    return UserResponse(message="User updated", user=UserProfile.from_user(user))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    ctx: AuthContext = Depends(require(Operation.USER_DELETE_ANY)),
    services: Services = Depends(get_services),
):
    await services.users.delete_user(user_id)
    return MessageResponse(message="User deleted")
