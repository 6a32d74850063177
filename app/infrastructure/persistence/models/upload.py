"""Upload ORM model (metadata for one stored blob)."""

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IntakeModel


class Upload(IntakeModel, Base):
    """Upload metadata. Table: upload. file_path is the blob key and is unique."""

    __tablename__ = "upload"

    process_id: Mapped[str] = mapped_column(
        String, ForeignKey("process.id", ondelete="CASCADE"), nullable=False, index=True
    )
    file_path: Mapped[str] = mapped_column(String(1024), nullable=False, unique=True)
    mime_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
