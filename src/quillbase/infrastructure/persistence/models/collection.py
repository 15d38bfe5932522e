"""SQLAlchemy model for the collections table."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quillbase.infrastructure.persistence.database import Base


class CollectionModel(Base):
    """SQLAlchemy model for the collections table.

    Attributes:
        id: Primary key, equal to the singular identifier at creation.
        name: Display name.
        singular: Single-resource route segment. Never changes.
        plural: Collection route segment. Never changes.
        type: "collection" or "single".
        fields: JSON-encoded ordered field list.
        integration_id: Optional external database integration.
        external_table_name: Backing table in that integration.
        created_at: Timestamp when the collection was created.
        updated_at: Timestamp when the collection was last updated.
    """

    __tablename__ = "collections"

    id: Mapped[str] = mapped_column(
        String(50),
        primary_key=True,
        comment="Collection ID (singular identifier)",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )
    singular: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
    )
    plural: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
    )
    type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default="collection",
    )
    fields: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="[]",
        comment="JSON list of {field_name, type, label, required}",
    )
    integration_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    external_table_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
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

    entries: Mapped[list["EntryModel"]] = relationship(  # noqa: F821
        "EntryModel",
        back_populates="collection",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Collection(id={self.id}, plural={self.plural})>"
