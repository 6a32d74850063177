"""Intake repositories against Postgres (migrated). Session is rolled back after each test."""

import pytest

from app.domain.exceptions import (
    InvalidTokenException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.persistence.repositories import (
    CategoryRepository,
    DepartmentRepository,
    ProcessRepository,
    TokenRepository,
    UploadRepository,
)
from app.shared.utils.generators import generate_token_secret


@pytest.fixture
async def reference(db_session):
    """One department, a plain and a note-required category, and an active token."""
    department = await DepartmentRepository(db_session).create_department("it-lager")
    categories = CategoryRepository(db_session)
    plain = await categories.create_category("it-wareneingang")
    strict = await categories.create_category("it-reklamation", notes_required=True)
    token = await TokenRepository(db_session).create_token(
        generate_token_secret(), label="it-token", department_ids=[department.id]
    )
    return department, plain, strict, token


@pytest.mark.requires_db
async def test_process_numbers_increase(db_session, reference) -> None:
    _, plain, _, token = reference
    repo = ProcessRepository(db_session)
    first = await repo.start_process(token.token, plain.id, None)
    second = await repo.start_process(token.token, plain.id, "  Palette 3 ")
    assert second.process_number == first.process_number + 1
    assert second.token_id == token.id


@pytest.mark.requires_db
async def test_inactive_or_unknown_token_rejected(db_session, reference) -> None:
    _, plain, _, token = reference
    await TokenRepository(db_session).set_active(token.id, False)
    repo = ProcessRepository(db_session)
    with pytest.raises(InvalidTokenException):
        await repo.start_process(token.token, plain.id, None)
    with pytest.raises(InvalidTokenException):
        await repo.start_process("tok_doesnotexist00", plain.id, None)


@pytest.mark.requires_db
async def test_category_checks(db_session, reference) -> None:
    _, _, strict, token = reference
    repo = ProcessRepository(db_session)
    with pytest.raises(ValidationException) as unknown:
        await repo.start_process(token.token, "no-such-category", None)
    assert unknown.value.details == {"field": "category_id"}
    with pytest.raises(ValidationException) as missing_note:
        await repo.start_process(token.token, strict.id, None)
    assert missing_note.value.details == {"field": "note"}


@pytest.mark.requires_db
async def test_uploads_recorded_listed_and_deleted(db_session, reference) -> None:
    _, plain, _, token = reference
    process = await ProcessRepository(db_session).start_process(token.token, plain.id, None)
    uploads = UploadRepository(db_session)
    path = f"{process.process_number}/it_0_a.jpg"
    recorded = await uploads.add_upload(process.id, path, "image/jpeg", 3)

    assert [u.id for u in await uploads.list_by_process(process.id)] == [recorded.id]
    assert path in await uploads.list_file_paths()
    assert await uploads.delete_upload(recorded.id) is True
    assert await uploads.delete_upload(recorded.id) is False


@pytest.mark.requires_db
async def test_upload_for_unknown_process_rejected(db_session) -> None:
    with pytest.raises(ResourceNotFoundException):
        await UploadRepository(db_session).add_upload("no-such-process", "0/x.jpg", None, None)


@pytest.mark.requires_db
async def test_token_memberships(db_session, reference) -> None:
    department, _, _, token = reference
    repo = TokenRepository(db_session)
    found = await repo.get_by_secret(token.token)
    assert found is not None
    assert found.department_ids == (department.id,)
    updated = await repo.replace_departments(token.id, [])
    assert updated is not None
    assert updated.department_ids == ()
