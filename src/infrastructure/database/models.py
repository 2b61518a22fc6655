"""SQLAlchemy ORM models."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CatalogItemModel(Base):
    """Catalog item (product) model."""

    __tablename__ = "catalog_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(400), nullable=False)
    published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    limited_to_stores: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    subject_to_acl: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    tags: Mapped[list["TagModel"]] = relationship(
        "TagModel",
        secondary="item_tags",
        back_populates="items",
        passive_deletes=True,
    )


class TagModel(Base):
    """Tag model."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(400), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    items: Mapped[list["CatalogItemModel"]] = relationship(
        "CatalogItemModel",
        secondary="item_tags",
        back_populates="tags",
        passive_deletes=True,
    )


class ItemTagModel(Base):
    """Association table for CatalogItem-Tag many-to-many relationship."""

    __tablename__ = "item_tags"

    item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("catalog_items.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    attached_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class UrlRecordModel(Base):
    """Search-engine friendly slug of an entity."""

    __tablename__ = "url_records"
    __table_args__ = (
        Index("ix_url_records_entity", "entity_name", "entity_id", "language_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)
    entity_name: Mapped[str] = mapped_column(String(400), nullable=False)
    slug: Mapped[str] = mapped_column(String(400), nullable=False, index=True)
    language_id: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class StoreMappingModel(Base):
    """Limits an entity to a store."""

    __tablename__ = "store_mappings"
    __table_args__ = (
        UniqueConstraint("entity_name", "entity_id", "store_id", name="uq_store_mapping"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entity_name: Mapped[str] = mapped_column(String(400), nullable=False, index=True)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)
    store_id: Mapped[int] = mapped_column(Integer, nullable=False)


class AclRecordModel(Base):
    """Grants a customer role access to an entity."""

    __tablename__ = "acl_records"
    __table_args__ = (
        UniqueConstraint(
            "entity_name", "entity_id", "customer_role_id", name="uq_acl_record"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entity_name: Mapped[str] = mapped_column(String(400), nullable=False, index=True)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)
    customer_role_id: Mapped[int] = mapped_column(Integer, nullable=False)
