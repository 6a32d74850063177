"""Pydantic request/response schemas for the API."""

from app.schemas.auth import AdminResponse, LoginRequest, RegisterRequest, TokenResponse
from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.intake import IntakeCategoryItem, IntakeResponse, UploadBatchResponse
from app.schemas.overview import (
    OrphanSweepRequest,
    OrphanSweepResponse,
    OverviewResponse,
    OverviewRowResponse,
    ProcessDetailResponse,
)
from app.schemas.reference_data import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    DepartmentCreateRequest,
    DepartmentResponse,
    IntakeTokenActiveRequest,
    IntakeTokenCreateRequest,
    IntakeTokenDepartmentsRequest,
    IntakeTokenResponse,
    IntakeTokenUpdateRequest,
)

__all__ = [
    "AdminResponse",
    "CategoryCreateRequest",
    "CategoryResponse",
    "CategoryUpdateRequest",
    "DepartmentCreateRequest",
    "DepartmentResponse",
    "HealthResponse",
    "IntakeCategoryItem",
    "IntakeResponse",
    "IntakeTokenActiveRequest",
    "IntakeTokenCreateRequest",
    "IntakeTokenDepartmentsRequest",
    "IntakeTokenResponse",
    "IntakeTokenUpdateRequest",
    "LoginRequest",
    "OrphanSweepRequest",
    "OrphanSweepResponse",
    "OverviewResponse",
    "OverviewRowResponse",
    "ProcessDetailResponse",
    "ReadinessResponse",
    "RegisterRequest",
    "TokenResponse",
    "UploadBatchResponse",
]
