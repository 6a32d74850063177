"""Auth API: administrator login, optional registration and current admin.

Uses only injected dependencies; the JWT is created via infrastructure security.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from app.api.v1.dependencies import (
    CurrentAdmin,
    get_admin_auth_service,
    get_admin_auth_service_for_write,
)
from app.application.services.admin_auth_service import AdminAuthService
from app.core.config import get_settings
from app.core.limiter import limit_auth
from app.infrastructure.security import create_access_token
from app.schemas.auth import AdminResponse, LoginRequest, RegisterRequest, TokenResponse

router = APIRouter()


@router.post("/register", response_model=AdminResponse, status_code=201)
@limit_auth
async def register(
    request: Request,
    body: RegisterRequest,
    auth_svc: Annotated[AdminAuthService, Depends(get_admin_auth_service_for_write)],
):
    """Create an administrator account. Disabled unless ALLOW_ADMIN_SIGNUP is set."""
    if not get_settings().allow_admin_signup:
        raise HTTPException(status_code=403, detail="Administrator registration is disabled")
    admin = await auth_svc.register(body.email, body.password)
    return AdminResponse.model_validate(admin)


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    auth_svc: Annotated[AdminAuthService, Depends(get_admin_auth_service)],
):
    """Authenticate with e-mail and password; return a bearer token."""
    admin = await auth_svc.authenticate(body.email, body.password)
    settings = get_settings()
    token = create_access_token(admin.id, admin.email)
    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60,
    )


@router.get("/me", response_model=AdminResponse)
async def get_me(current_admin: CurrentAdmin):
    """Return the administrator behind the bearer token."""
    return AdminResponse.model_validate(current_admin)
