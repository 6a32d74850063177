"""Builders for application DTOs used across unit and API tests."""

from datetime import datetime, timezone

from app.application.dtos.admin_user import AdminUserResult
from app.application.dtos.category import CategoryResult
from app.application.dtos.process import ProcessResult
from app.application.dtos.token import TokenResult
from app.application.dtos.upload import IncomingFile, UploadResult

T0 = datetime(2025, 3, 14, 9, 30, 0, tzinfo=timezone.utc)

ADMIN = AdminUserResult(id="a1", email="admin@example.com", is_active=True)


def make_token(
    token_id: str = "tk1",
    secret: str = "tok_abc123",
    *,
    label: str | None = None,
    email: str | None = None,
    active: bool = True,
    department_ids: tuple[str, ...] = (),
) -> TokenResult:
    return TokenResult(
        id=token_id,
        token=secret,
        label=label,
        email=email,
        active=active,
        created_at=T0,
        department_ids=department_ids,
    )


def make_category(
    category_id: str = "cat1", name: str = "Wareneingang", notes_required: bool = False
) -> CategoryResult:
    return CategoryResult(
        id=category_id, name=name, notes_required=notes_required, created_at=T0
    )


def make_process(
    process_id: str = "p42",
    process_number: int = 42,
    *,
    token_id: str = "tk1",
    category_id: str | None = "cat1",
    note: str | None = None,
    created_at: datetime = T0,
) -> ProcessResult:
    return ProcessResult(
        id=process_id,
        process_number=process_number,
        token_id=token_id,
        category_id=category_id,
        note=note,
        created_at=created_at,
    )


def make_upload(
    upload_id: str = "u1",
    process_id: str = "p42",
    file_path: str = "42/1_0_a.jpg",
    *,
    created_at: datetime = T0,
    mime_type: str | None = "image/jpeg",
    size: int | None = 3,
) -> UploadResult:
    return UploadResult(
        id=upload_id,
        process_id=process_id,
        file_path=file_path,
        mime_type=mime_type,
        size=size,
        created_at=created_at,
    )


def make_file(name: str = "a.jpg", data: bytes = b"abc", mime_type: str | None = "image/jpeg") -> IncomingFile:
    return IncomingFile(data=data, name=name, mime_type=mime_type, size=len(data))
