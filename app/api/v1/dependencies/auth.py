"""Administrator authentication dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.v1.dependencies.db import (
    get_admin_user_repo,
    get_admin_user_repo_for_write,
)
from app.application.dtos.admin_user import AdminUserResult
from app.application.services.admin_auth_service import AdminAuthService
from app.domain.exceptions import AuthenticationException
from app.infrastructure.persistence.repositories import AdminUserRepository
from app.infrastructure.security import BcryptPasswordHasher, decode_access_token
from app.shared.context import set_current_admin

_http_bearer = HTTPBearer(auto_error=False)


async def get_admin_auth_service(
    admin_repo: Annotated[AdminUserRepository, Depends(get_admin_user_repo)],
) -> AdminAuthService:
    """Login service over a read session."""
    return AdminAuthService(admin_repo, BcryptPasswordHasher())


async def get_admin_auth_service_for_write(
    admin_repo: Annotated[AdminUserRepository, Depends(get_admin_user_repo_for_write)],
) -> AdminAuthService:
    """Registration service over a transactional session."""
    return AdminAuthService(admin_repo, BcryptPasswordHasher())


async def get_current_admin_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    admin_repo: Annotated[AdminUserRepository, Depends(get_admin_user_repo)],
) -> AdminUserResult | None:
    """Return the administrator from the bearer token if present and valid; else None."""
    if not credentials:
        return None
    try:
        claims = decode_access_token(credentials.credentials)
    except AuthenticationException:
        return None
    admin = await admin_repo.get_by_id(claims.admin_id)
    if admin is None or not admin.is_active:
        return None
    set_current_admin(admin.id)
    return admin


async def get_current_admin(
    current_admin: Annotated[AdminUserResult | None, Depends(get_current_admin_optional)],
) -> AdminUserResult:
    """Return the authenticated administrator; raise 401 if missing or invalid."""
    if current_admin is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_admin


CurrentAdmin = Annotated[AdminUserResult, Depends(get_current_admin)]
