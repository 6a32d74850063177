"""Public intake API: category list and token-authorized batch upload.

No administrator session; the intake token in the form authorizes the call.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from app.api.v1.dependencies import get_category_repo, get_intake_service
from app.api.v1.endpoints._uploads import read_incoming_files
from app.application.use_cases.intake import IntakeService
from app.core.limiter import limit_upload
from app.infrastructure.persistence.repositories import CategoryRepository
from app.schemas.intake import IntakeCategoryItem, IntakeResponse, UploadBatchResponse

router = APIRouter()


@router.get("/categories", response_model=list[IntakeCategoryItem])
async def list_intake_categories(
    category_repo: Annotated[CategoryRepository, Depends(get_category_repo)],
):
    """Categories for the intake form, ordered by name."""
    categories = await category_repo.list_categories()
    return [IntakeCategoryItem.model_validate(c) for c in categories]


@router.post("", response_model=IntakeResponse, status_code=200)
@limit_upload
async def submit_intake(
    request: Request,
    intake_svc: Annotated[IntakeService, Depends(get_intake_service)],
    token: str = Form(...),
    category_id: str = Form(...),
    note: str | None = Form(None),
    notify: bool = Form(False),
    files: list[UploadFile] = File(...),
):
    """Open a process for the token and store the images in order.

    Rejections (token, category, note, files) happen before anything is written.
    Once the process exists the response is 200; check batch.succeeded for
    a file that failed part-way.
    """
    incoming = await read_incoming_files(files)
    outcome = await intake_svc.submit(
        token=token,
        category_id=category_id,
        note=note,
        files=incoming,
        notify=notify,
    )
    process = outcome.process
    return IntakeResponse(
        process_id=process.id,
        process_number=process.process_number,
        category_name=outcome.category_name,
        note=process.note,
        created_at=process.created_at,
        notification_requested=outcome.notification_requested,
        batch=UploadBatchResponse.from_result(outcome.batch),
    )
