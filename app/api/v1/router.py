"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    audit,
    auth,
    categories,
    departments,
    health,
    intake,
    maintenance,
    tokens,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(intake.router, prefix="/intake", tags=["intake"])
api_router.include_router(audit.router, tags=["audit"])
api_router.include_router(
    maintenance.router, prefix="/maintenance", tags=["maintenance"]
)
api_router.include_router(tokens.router, prefix="/tokens", tags=["tokens"])
api_router.include_router(
    departments.router, prefix="/departments", tags=["departments"]
)
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
