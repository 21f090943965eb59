# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST   /auth/login       - Check credentials, get a token
#   GET    /auth/roles       - List roles              (admin)
#   POST   /auth/roles       - Create a custom role    (super admin)
#   DELETE /auth/roles/{id}  - Delete a custom role    (super admin)
#
# The token is returned in the body and in an `Authorization: Bearer ...`
# response header.
#
# =============================================================================

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr

from onestay.api.deps import get_services, get_tokens
from onestay.auth.context import AuthContext
from onestay.auth.gate import require
from onestay.auth.roles import Operation
from onestay.auth.tokens import TokenService
from onestay.core.models import Role, UserProfile
from onestay.services import RoleCreate, Services

router = APIRouter(prefix="/auth", tags=["auth"])


# =============================================================================
# Request/Response Models
# =============================================================================


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserProfile


class RoleListResponse(BaseModel):
    roles: list[Role]
    count: int


class RoleResponse(BaseModel):
    message: str
    role: Role


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Public Endpoints
# =============================================================================


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    services: Services = Depends(get_services),
    tokens: TokenService = Depends(get_tokens),
):
    """Authenticate and get a token."""
    user = await services.users.authenticate(data.email, data.password)
    token = tokens.issue(user.id, user.role_id, user.email)

    response.headers["Authorization"] = f"Bearer {token}"
    return LoginResponse(token=token, user=UserProfile.from_user(user))


# =============================================================================
# Roles
# =============================================================================


@router.get("/roles", response_model=RoleListResponse)
async def list_roles(
    ctx: AuthContext = Depends(require(Operation.ROLE_LIST)),
    services: Services = Depends(get_services),
):
    roles = await services.roles.list_roles()
    return RoleListResponse(roles=roles, count=len(roles))


@router.post("/roles", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(
    data: RoleCreate,
    ctx: AuthContext = Depends(require(Operation.ROLE_CREATE)),
    services: Services = Depends(get_services),
):
    role = await services.roles.create_role(data)
    return RoleResponse(message="Role created", role=role)


@router.delete("/roles/{role_id}", response_model=MessageResponse)
async def delete_role(
    role_id: str,
    ctx: AuthContext = Depends(require(Operation.ROLE_DELETE)),
    services: Services = Depends(get_services),
):
    await services.roles.delete_role(role_id)
    return MessageResponse(message="Role deleted")
