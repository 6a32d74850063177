"""Department ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IntakeModel


class Department(IntakeModel, Base):
    """Department. Table: department. Unique name."""

    __tablename__ = "department"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
