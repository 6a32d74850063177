"""Token and TokenDepartment ORM models (intake access tokens)."""

from sqlalchemy import Boolean, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IntakeModel


class Token(IntakeModel, Base):
    """Intake token. Table: token. The secret is unique and never changes."""

    __tablename__ = "token"

    token: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    label: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), default=True
    )


class TokenDepartment(Base):
    """Many-to-many token-department. Table: token_department."""

    __tablename__ = "token_department"

    token_id: Mapped[str] = mapped_column(
        String, ForeignKey("token.id", ondelete="CASCADE"), primary_key=True
    )
    department_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("department.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
