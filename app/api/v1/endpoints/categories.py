"""Categories API (administrators). The public list lives under /intake/categories."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CurrentAdmin,
    get_reference_data_reader,
    get_reference_data_service,
)
from app.application.services.reference_data_service import ReferenceDataService
from app.core.limiter import limit_writes
from app.schemas.reference_data import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_reader)],
):
    items = await service.list_categories()
    return [CategoryResponse.model_validate(c) for c in items]


@router.post("", response_model=CategoryResponse, status_code=201)
@limit_writes
async def create_category(
    request: Request,
    body: CategoryCreateRequest,
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_service)],
):
    created = await service.create_category(body.name, notes_required=body.notes_required)
    return CategoryResponse.model_validate(created)


@router.patch("/{category_id}", response_model=CategoryResponse)
@limit_writes
async def update_category(
    request: Request,
    category_id: str,
    body: CategoryUpdateRequest,
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_service)],
):
    updated = await service.update_category(
        category_id, name=body.name, notes_required=body.notes_required
    )
    return CategoryResponse.model_validate(updated)


@router.delete("/{category_id}", status_code=204)
@limit_writes
async def delete_category(
    request: Request,
    category_id: str,
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_service)],
):
    """Delete a category. Its processes keep existing without one."""
    await service.delete_category(category_id)
