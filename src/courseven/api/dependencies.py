"""FastAPI dependencies shared by the v1 routers."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from ..core.auth import StaticTokenProvider
from ..core.config import Settings
from ..core.gateway import TableGateway
from ..repositories import Repositories, build_repositories


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> TableGateway:
    return request.app.state.gateway


def get_access_token(authorization: Optional[str] = Header(default=None)) -> str:
    """Bearer token of the caller, forwarded to the table store."""

    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token not available",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token.strip()


def get_repositories(
    token: str = Depends(get_access_token),
    gateway: TableGateway = Depends(get_gateway),
    settings: Settings = Depends(get_app_settings),
) -> Repositories:
    return build_repositories(
        gateway,
        StaticTokenProvider(token),
        tolerate_assessment_read_errors=settings.tolerate_assessment_read_errors,
    )
