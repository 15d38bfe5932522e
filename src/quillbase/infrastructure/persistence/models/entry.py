"""SQLAlchemy model for the entries table.

Entries are the content records stored under a collection.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quillbase.infrastructure.persistence.database import Base


class EntryModel(Base):
    """SQLAlchemy model for the entries table.

    Attributes:
        id: Primary key (UUID string).
        collection_id: Owning collection; entries go when it goes.
        data: JSON-encoded field values.
    """

    __tablename__ = "entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    collection_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    data: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    collection: Mapped["CollectionModel"] = relationship(  # noqa: F821
        "CollectionModel",
        back_populates="entries",
    )

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, collection_id={self.collection_id})>"
