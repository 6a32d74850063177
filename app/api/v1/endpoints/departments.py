"""Departments API (administrators)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CurrentAdmin,
    get_reference_data_reader,
    get_reference_data_service,
)
from app.application.services.reference_data_service import ReferenceDataService
from app.core.limiter import limit_writes
from app.schemas.reference_data import DepartmentCreateRequest, DepartmentResponse

router = APIRouter()


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_reader)],
):
    items = await service.list_departments()
    return [DepartmentResponse.model_validate(d) for d in items]


@router.post("", response_model=DepartmentResponse, status_code=201)
@limit_writes
async def create_department(
    request: Request,
    body: DepartmentCreateRequest,
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_service)],
):
    created = await service.create_department(body.name)
    return DepartmentResponse.model_validate(created)


@router.put("/{department_id}", response_model=DepartmentResponse)
@limit_writes
async def rename_department(
    request: Request,
    department_id: str,
    body: DepartmentCreateRequest,
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_service)],
):
    updated = await service.rename_department(department_id, body.name)
    return DepartmentResponse.model_validate(updated)


@router.delete("/{department_id}", status_code=204)
@limit_writes
async def delete_department(
    request: Request,
    department_id: str,
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_service)],
):
    """Delete a department; its token memberships go with it."""
    await service.delete_department(department_id)
