"""
Shared route dependencies.

Everything the routes need is built once in the app lifespan and kept on
app.state; these accessors hand it to handlers.
"""

from __future__ import annotations

from fastapi import Request

from onestay.auth.tokens import TokenService
from onestay.services import Services


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_tokens(request: Request) -> TokenService:
    return request.app.state.tokens
