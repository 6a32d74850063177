"""Category ORM model."""

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IntakeModel


class Category(IntakeModel, Base):
    """Process category. Table: category. notes_required makes the note mandatory."""

    __tablename__ = "category"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    notes_required: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false"), default=False
    )
