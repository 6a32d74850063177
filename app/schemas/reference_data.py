"""Reference data API schemas: departments, categories and intake tokens."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class DepartmentCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class DepartmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    notes_required: bool = False


class CategoryUpdateRequest(BaseModel):
    """Partial update; omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    notes_required: bool | None = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    notes_required: bool
    created_at: datetime


class IntakeTokenCreateRequest(BaseModel):
    """The secret is generated by the server."""

    label: str | None = Field(default=None, max_length=255)
    email: EmailStr | None = None
    department_ids: list[str] = Field(default_factory=list)

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email_to_none(cls, v: object) -> object:
        """Empty string clears the address."""
        return _blank_to_none(v)


class IntakeTokenUpdateRequest(BaseModel):
    """Replaces label and email; empty values clear them."""

    label: str | None = Field(default=None, max_length=255)
    email: EmailStr | None = None

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email_to_none(cls, v: object) -> object:
        """Empty string clears the address."""
        return _blank_to_none(v)


class IntakeTokenActiveRequest(BaseModel):
    active: bool


class IntakeTokenDepartmentsRequest(BaseModel):
    department_ids: list[str]


class IntakeTokenResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    token: str
    label: str | None = None
    email: str | None = None
    active: bool
    created_at: datetime
    department_ids: list[str]
