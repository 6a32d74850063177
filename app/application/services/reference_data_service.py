"""Reference data service: departments, categories and intake tokens (admin CRUD)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from email_validator import EmailNotValidError, validate_email

from app.domain.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced
from app.shared.utils.generators import generate_token_secret

if TYPE_CHECKING:
    from app.application.dtos.category import CategoryResult
    from app.application.dtos.department import DepartmentResult
    from app.application.dtos.token import TokenResult
    from app.application.interfaces.repositories import (
        ICategoryRepository,
        IDepartmentRepository,
        ITokenRepository,
    )

logger = get_logger(__name__)

MAX_NAME_LENGTH = 255


def _required_name(value: str | None, field: str) -> str:
    name = (value or "").strip()
    if not name:
        raise ValidationException(f"{field.capitalize()} is required", field=field)
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationException(
            f"{field.capitalize()} must be at most {MAX_NAME_LENGTH} characters",
            field=field,
        )
    return name


def _optional_text(value: str | None) -> str | None:
    text = (value or "").strip()
    return text or None


def _optional_email(value: str | None) -> str | None:
    email = _optional_text(value)
    if email is None:
        return None
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise ValidationException(f"Invalid email address: {e}", field="email") from e


class ReferenceDataService:
    """CRUD over the reference tables that gate and classify intake.

    Tokens are never deleted; they are deactivated. A token's secret is
    generated once and never changes.
    """

    def __init__(
        self,
        department_repo: IDepartmentRepository,
        category_repo: ICategoryRepository,
        token_repo: ITokenRepository,
    ) -> None:
        self._department_repo = department_repo
        self._category_repo = category_repo
        self._token_repo = token_repo

    # Departments

    async def list_departments(self) -> list[DepartmentResult]:
        return await self._department_repo.list_departments()

    @traced("reference.create_department")
    async def create_department(self, name: str) -> DepartmentResult:
        """Create a department.

        Raises:
            ValidationException: name is empty or too long.
            DuplicateResourceException: a department with this name exists.
        """
        clean = _required_name(name, "name")
        if await self._department_repo.get_by_name(clean):
            raise DuplicateResourceException("department", clean)
        created = await self._department_repo.create_department(clean)
        logger.info("Created department %s", created.id)
        return created

    async def rename_department(self, department_id: str, name: str) -> DepartmentResult:
        clean = _required_name(name, "name")
        existing = await self._department_repo.get_by_name(clean)
        if existing and existing.id != department_id:
            raise DuplicateResourceException("department", clean)
        updated = await self._department_repo.rename_department(department_id, clean)
        if updated is None:
            raise ResourceNotFoundException("department", department_id)
        return updated

    async def delete_department(self, department_id: str) -> None:
        if not await self._department_repo.delete_department(department_id):
            raise ResourceNotFoundException("department", department_id)
        logger.info("Deleted department %s", department_id)

    # Categories

    async def list_categories(self) -> list[CategoryResult]:
        return await self._category_repo.list_categories()

    @traced("reference.create_category")
    async def create_category(
        self, name: str, notes_required: bool = False
    ) -> CategoryResult:
        """Create a category.

        Raises:
            ValidationException: name is empty or too long.
            DuplicateResourceException: a category with this name exists.
        """
        clean = _required_name(name, "name")
        if await self._category_repo.get_by_name(clean):
            raise DuplicateResourceException("category", clean)
        created = await self._category_repo.create_category(
            clean, notes_required=notes_required
        )
        logger.info("Created category %s", created.id)
        return created

    async def update_category(
        self,
        category_id: str,
        *,
        name: str | None = None,
        notes_required: bool | None = None,
    ) -> CategoryResult:
        clean: str | None = None
        if name is not None:
            clean = _required_name(name, "name")
            existing = await self._category_repo.get_by_name(clean)
            if existing and existing.id != category_id:
                raise DuplicateResourceException("category", clean)
        updated = await self._category_repo.update_category(
            category_id, name=clean, notes_required=notes_required
        )
        if updated is None:
            raise ResourceNotFoundException("category", category_id)
        return updated

    async def delete_category(self, category_id: str) -> None:
        if not await self._category_repo.delete_category(category_id):
            raise ResourceNotFoundException("category", category_id)
        logger.info("Deleted category %s", category_id)

    # Tokens

    async def list_tokens(self) -> list[TokenResult]:
        return await self._token_repo.list_tokens()

    async def get_token(self, token_id: str) -> TokenResult:
        token = await self._token_repo.get_by_id(token_id)
        if token is None:
            raise ResourceNotFoundException("token", token_id)
        return token

    async def _validate_department_ids(self, department_ids: list[str]) -> list[str]:
        unique_ids = list(dict.fromkeys(department_ids))
        for department_id in unique_ids:
            if await self._department_repo.get_by_id(department_id) is None:
                raise ValidationException(
                    f"Unknown department: {department_id}", field="department_ids"
                )
        return unique_ids

    @traced("reference.create_token")
    async def create_token(
        self,
        *,
        label: str | None = None,
        email: str | None = None,
        department_ids: list[str] | None = None,
    ) -> TokenResult:
        """Create an active token with a freshly generated secret.

        Raises:
            ValidationException: invalid email or unknown department id.
        """
        clean_email = _optional_email(email)
        ids = await self._validate_department_ids(department_ids or [])
        created = await self._token_repo.create_token(
            generate_token_secret(),
            label=_optional_text(label),
            email=clean_email,
            department_ids=ids,
        )
        logger.info("Created token %s with %d department(s)", created.id, len(ids))
        return created

    async def update_token(
        self, token_id: str, *, label: str | None, email: str | None
    ) -> TokenResult:
        updated = await self._token_repo.update_token(
            token_id, label=_optional_text(label), email=_optional_email(email)
        )
        if updated is None:
            raise ResourceNotFoundException("token", token_id)
        return updated

    async def set_token_active(self, token_id: str, active: bool) -> TokenResult:
        updated = await self._token_repo.set_active(token_id, active)
        if updated is None:
            raise ResourceNotFoundException("token", token_id)
        logger.info("Token %s %s", token_id, "activated" if active else "deactivated")
        return updated

    async def replace_token_departments(
        self, token_id: str, department_ids: list[str]
    ) -> TokenResult:
        ids = await self._validate_department_ids(department_ids)
        updated = await self._token_repo.replace_departments(token_id, ids)
        if updated is None:
            raise ResourceNotFoundException("token", token_id)
        return updated
