"""SQLAlchemy mixins shared by the intake models.

Provides: CuidMixin, CreatedAtMixin and the combined IntakeModel.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class CreatedAtMixin:
    """Mixin for created_at (server default, timezone-aware, indexed). No updated_at."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            nullable=False,
            index=True,
        )


class IntakeModel(CuidMixin, CreatedAtMixin):
    """Combined mixin: CUID + created_at. Common for intake models."""

    __abstract__ = True
