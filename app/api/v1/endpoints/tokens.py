"""Intake tokens API (administrators).

Tokens are never deleted; deactivate them instead. The secret is generated
on create and cannot be changed.
"""

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
    IntakeTokenActiveRequest,
    IntakeTokenCreateRequest,
    IntakeTokenDepartmentsRequest,
    IntakeTokenResponse,
    IntakeTokenUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=list[IntakeTokenResponse])
async def list_tokens(
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_reader)],
):
    """All tokens, newest first, with their department ids."""
    items = await service.list_tokens()
    return [IntakeTokenResponse.model_validate(t) for t in items]


@router.get("/{token_id}", response_model=IntakeTokenResponse)
async def get_token(
    token_id: str,
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_reader)],
):
    return IntakeTokenResponse.model_validate(await service.get_token(token_id))


@router.post("", response_model=IntakeTokenResponse, status_code=201)
@limit_writes
async def create_token(
    request: Request,
    body: IntakeTokenCreateRequest,
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_service)],
):
    created = await service.create_token(
        label=body.label, email=body.email, department_ids=body.department_ids
    )
    return IntakeTokenResponse.model_validate(created)


@router.put("/{token_id}", response_model=IntakeTokenResponse)
@limit_writes
async def update_token(
    request: Request,
    token_id: str,
    body: IntakeTokenUpdateRequest,
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_service)],
):
    updated = await service.update_token(token_id, label=body.label, email=body.email)
    return IntakeTokenResponse.model_validate(updated)


@router.put("/{token_id}/active", response_model=IntakeTokenResponse)
@limit_writes
async def set_token_active(
    request: Request,
    token_id: str,
    body: IntakeTokenActiveRequest,
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_service)],
):
    updated = await service.set_token_active(token_id, body.active)
    return IntakeTokenResponse.model_validate(updated)


@router.put("/{token_id}/departments", response_model=IntakeTokenResponse)
@limit_writes
async def replace_token_departments(
    request: Request,
    token_id: str,
    body: IntakeTokenDepartmentsRequest,
    _: CurrentAdmin,
    service: Annotated[ReferenceDataService, Depends(get_reference_data_service)],
):
    updated = await service.replace_token_departments(token_id, body.department_ids)
    return IntakeTokenResponse.model_validate(updated)
