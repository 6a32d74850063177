"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.admin_user import AdminUserResult
    from app.application.dtos.category import CategoryResult
    from app.application.dtos.department import DepartmentResult
    from app.application.dtos.process import ProcessResult
    from app.application.dtos.token import TokenMembership, TokenResult
    from app.application.dtos.upload import UploadResult


# Transaction interface (an AsyncSession satisfies it)
class ITransaction(Protocol):
    """Makes the writes issued so far durable."""

    async def commit(self) -> None:
        """Commit the current transaction; raises if the store rejects it."""


# Token repository interface
class ITokenRepository(Protocol):
    """Protocol for intake token persistence (tokens and department memberships)."""

    async def get_by_secret(self, secret: str) -> TokenResult | None:
        """Return the token with this exact secret (active or not), or None."""

    async def get_by_id(self, token_id: str) -> TokenResult | None:
        """Return token by ID with its department ids."""

    async def list_tokens(self, limit: int = 1000) -> list[TokenResult]:
        """Return tokens newest first, each with its department ids."""

    async def list_memberships(self, limit: int = 10000) -> list[TokenMembership]:
        """Return all token-department membership rows."""

    async def create_token(
        self,
        secret: str,
        *,
        label: str | None = None,
        email: str | None = None,
        department_ids: list[str] | None = None,
    ) -> TokenResult:
        """Create an active token with the given memberships."""

    async def update_token(
        self, token_id: str, *, label: str | None, email: str | None
    ) -> TokenResult | None:
        """Replace label and email; return None when the token does not exist."""

    async def set_active(self, token_id: str, active: bool) -> TokenResult | None:
        """Set the active flag; return None when the token does not exist."""

    async def replace_departments(
        self, token_id: str, department_ids: list[str]
    ) -> TokenResult | None:
        """Replace all memberships of the token; return None when it does not exist."""


# Department repository interface
class IDepartmentRepository(Protocol):
    """Protocol for department persistence."""

    async def get_by_id(self, department_id: str) -> DepartmentResult | None:
        """Return department by ID."""

    async def get_by_name(self, name: str) -> DepartmentResult | None:
        """Return department by exact name."""

    async def list_departments(self, limit: int = 1000) -> list[DepartmentResult]:
        """Return departments ordered by name."""

    async def create_department(self, name: str) -> DepartmentResult:
        """Create a department."""

    async def rename_department(
        self, department_id: str, name: str
    ) -> DepartmentResult | None:
        """Rename; return None when the department does not exist."""

    async def delete_department(self, department_id: str) -> bool:
        """Delete (memberships cascade). Return False when not found."""


# Category repository interface
class ICategoryRepository(Protocol):
    """Protocol for category persistence."""

    async def get_by_id(self, category_id: str) -> CategoryResult | None:
        """Return category by ID."""

    async def get_by_name(self, name: str) -> CategoryResult | None:
        """Return category by exact name."""

    async def list_categories(self, limit: int = 1000) -> list[CategoryResult]:
        """Return categories ordered by name."""

    async def create_category(
        self, name: str, *, notes_required: bool = False
    ) -> CategoryResult:
        """Create a category."""

    async def update_category(
        self,
        category_id: str,
        *,
        name: str | None = None,
        notes_required: bool | None = None,
    ) -> CategoryResult | None:
        """Update given fields; return None when the category does not exist."""

    async def delete_category(self, category_id: str) -> bool:
        """Delete (processes keep a NULL category). Return False when not found."""


# Process repository interface
class IProcessRepository(Protocol):
    """Protocol for process persistence. Processes are only created by start_process."""

    async def start_process(
        self, token_secret: str, category_id: str, note: str | None
    ) -> ProcessResult:
        """Validate token and category and insert the process in one atomic store call.

        Raises InvalidTokenException, ValidationException or PersistenceException.
        """

    async def get_by_id(self, process_id: str) -> ProcessResult | None:
        """Return process by ID."""

    async def list_processes(self, limit: int = 5000) -> list[ProcessResult]:
        """Return processes newest first."""


# Upload repository interface
class IUploadRepository(Protocol):
    """Protocol for upload metadata persistence."""

    async def add_upload(
        self,
        process_id: str,
        file_path: str,
        mime_type: str | None,
        size: int | None,
    ) -> UploadResult:
        """Record metadata for a stored blob. Raises PersistenceException on failure."""

    async def get_by_id(self, upload_id: str) -> UploadResult | None:
        """Return upload by ID."""

    async def list_by_process(self, process_id: str) -> list[UploadResult]:
        """Return the uploads of one process, newest first."""

    async def list_uploads(self, limit: int = 50000) -> list[UploadResult]:
        """Return uploads newest first."""

    async def list_file_paths(self) -> set[str]:
        """Return every recorded file_path (used to find orphaned blobs)."""

    async def delete_upload(self, upload_id: str) -> bool:
        """Delete the metadata row. Return False when not found."""


# Admin user repository interface
class IAdminUserRepository(Protocol):
    """Protocol for administrator accounts (session provider)."""

    async def get_by_id(self, admin_id: str) -> AdminUserResult | None:
        """Return administrator by ID."""

    async def get_by_email(self, email: str) -> AdminUserResult | None:
        """Return administrator by email (case-insensitive)."""

    async def get_password_hash(self, email: str) -> tuple[AdminUserResult, str] | None:
        """Return the administrator and stored password hash, for login."""

    async def create_admin(self, email: str, hashed_password: str) -> AdminUserResult:
        """Create an active administrator."""


# Audit snapshot reader interface (six independent reads for the overview)
class IAuditSnapshotReader(Protocol):
    """Protocol for the overview's bulk reads. Each call must be safe to run concurrently."""

    async def read_departments(self) -> list[DepartmentResult]:
        """Departments ordered by name."""

    async def read_tokens(self) -> list[TokenResult]:
        """Tokens newest first."""

    async def read_memberships(self) -> list[TokenMembership]:
        """All token-department memberships."""

    async def read_categories(self) -> list[CategoryResult]:
        """Categories ordered by name."""

    async def read_processes(self) -> list[ProcessResult]:
        """Processes newest first."""

    async def read_uploads(self) -> list[UploadResult]:
        """Uploads newest first."""
