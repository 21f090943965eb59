"""Legacy logement routes, kept for first-generation clients."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from onestay.api.deps import get_services
from onestay.auth.context import AuthContext
from onestay.auth.gate import optional_context, require
from onestay.auth.roles import Operation
from onestay.core.models import Logement
from onestay.services import LogementCreate, Services

router = APIRouter(prefix="/logements", tags=["logements"])


class LogementResponse(BaseModel):
    message: str
    logement: Logement


class LogementListResponse(BaseModel):
    logements: list[Logement]
    count: int


@router.post("", response_model=LogementResponse, status_code=status.HTTP_201_CREATED)
async def create_logement(
    data: LogementCreate,
    ctx: AuthContext = Depends(require(Operation.LOGEMENT_CREATE)),
    services: Services = Depends(get_services),
):
    logement = await services.logements.create(ctx.subject_id, data)
    return LogementResponse(message="Logement created", logement=logement)


@router.get("/user/{user_id}", response_model=LogementListResponse)
async def list_user_logements(
    user_id: str,
    ctx: AuthContext = Depends(optional_context),
    services: Services = Depends(get_services),
):
    logements = await services.logements.list_by_owner(user_id, ctx)
    return LogementListResponse(logements=logements, count=len(logements))
