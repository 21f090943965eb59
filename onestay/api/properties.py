"""
Property routes.

Reads are public; drafts are only visible to their host. Writes need a
token, and changing an existing property needs to be its host.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from onestay.api.deps import get_services
from onestay.auth.context import AuthContext
from onestay.auth.gate import optional_context, require
from onestay.auth.roles import Operation
from onestay.core.models import Property
from onestay.services import PropertyCreate, PropertyUpdate, Services

router = APIRouter(prefix="/properties", tags=["properties"])


class PropertyResponse(BaseModel):
    message: str | None = None
    property: Property


class PropertyListResponse(BaseModel):
    properties: list[Property]
    count: int


class MessageResponse(BaseModel):
    message: str


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
    data: PropertyCreate,
    ctx: AuthContext = Depends(require(Operation.PROPERTY_CREATE)),
    services: Services = Depends(get_services),
):
    prop = await services.properties.create(ctx.subject_id, data)
    return PropertyResponse(message="Property created", property=prop)


@router.get("", response_model=PropertyListResponse)
async def list_properties(
    limit: int = Query(20, ge=1, le=100),
    skip: int = Query(0, ge=0),
    services: Services = Depends(get_services),
):
    """Published properties, newest first."""
    props = await services.properties.list_published(limit=limit, skip=skip)
    return PropertyListResponse(properties=props, count=len(props))


@router.get("/user/{user_id}", response_model=PropertyListResponse)
async def list_user_properties(
    user_id: str,
    ctx: AuthContext = Depends(optional_context),
    services: Services = Depends(get_services),
):
    props = await services.properties.list_by_owner(user_id, ctx)
    return PropertyListResponse(properties=props, count=len(props))


@router.get("/{id_or_slug}", response_model=PropertyResponse)
async def get_property(
    id_or_slug: str,
    ctx: AuthContext = Depends(optional_context),
    services: Services = Depends(get_services),
):
    return PropertyResponse(property=await services.properties.get_visible(id_or_slug, ctx))


@router.put("/{id_or_slug}", response_model=PropertyResponse)
async def update_property(
    id_or_slug: str,
    data: PropertyUpdate,
    ctx: AuthContext = Depends(require(Operation.PROPERTY_UPDATE)),
    services: Services = Depends(get_services),
):
    prop = await services.properties.update(id_or_slug, ctx, data)
    return PropertyResponse(message="Property updated", property=prop)


@router.post("/{id_or_slug}/publish", response_model=PropertyResponse)
async def publish_property(
    id_or_slug: str,
    ctx: AuthContext = Depends(require(Operation.PROPERTY_PUBLISH)),
    services: Services = Depends(get_services),
):
    prop = await services.properties.publish(id_or_slug, ctx)
    return PropertyResponse(message="Property published", property=prop)


@router.delete("/{id_or_slug}", response_model=MessageResponse)
async def delete_property(
    id_or_slug: str,
    ctx: AuthContext = Depends(require(Operation.PROPERTY_DELETE)),
    services: Services = Depends(get_services),
):
    await services.properties.delete(id_or_slug, ctx)
    return MessageResponse(message="Property deleted")
