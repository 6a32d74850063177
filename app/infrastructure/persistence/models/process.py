"""Process ORM model. Rows are inserted only by the start_process procedure."""

from sqlalchemy import BigInteger, ForeignKey, Identity, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IntakeModel


class Process(IntakeModel, Base):
    """Intake process. Table: process. process_number is a store-assigned identity."""

    __tablename__ = "process"

    process_number: Mapped[int] = mapped_column(
        BigInteger, Identity(always=True), nullable=False, unique=True
    )
    token_id: Mapped[str] = mapped_column(
        String, ForeignKey("token.id"), nullable=False, index=True
    )
    category_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("category.id", ondelete="SET NULL"), nullable=True, index=True
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
