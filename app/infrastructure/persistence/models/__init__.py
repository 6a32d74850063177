"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.admin_user import AdminUser
from app.infrastructure.persistence.models.category import Category
from app.infrastructure.persistence.models.department import Department
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    IntakeModel,
)
from app.infrastructure.persistence.models.process import Process
from app.infrastructure.persistence.models.token import Token, TokenDepartment
from app.infrastructure.persistence.models.upload import Upload

__all__ = [
    "AdminUser",
    "Category",
    "CreatedAtMixin",
    "CuidMixin",
    "Department",
    "IntakeModel",
    "Process",
    "Token",
    "TokenDepartment",
    "Upload",
]
