from typing import Optional

from sqlalchemy import (
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from local_crud.models.base import Base, TimestampedMixin


class ItemType(Base):
    __tablename__ = "item_types"

    item_type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(80), unique=True, nullable=False)

    type_fields: Mapped[list["ItemTypeField"]] = relationship(
        back_populates="item_type",
        order_by="ItemTypeField.order_index",
        foreign_keys="ItemTypeField.item_type_id",
    )


class FieldDefinition(Base):
    __tablename__ = "fields"

    field_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(80), unique=True, nullable=False)


class ItemTypeField(Base):
    __tablename__ = "item_type_fields"
    __table_args__ = (
        UniqueConstraint("item_type_id", "field_id", name="uq_item_type_field"),
        Index("ix_item_type_field_base", "item_type_id", "base_field_id"),
    )

    item_type_field_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_type_id: Mapped[int] = mapped_column(ForeignKey("item_types.item_type_id"), nullable=False)
    field_id: Mapped[int] = mapped_column(ForeignKey("fields.field_id"), nullable=False)
    base_field_id: Mapped[int | None] = mapped_column(ForeignKey("fields.field_id"), nullable=True)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)

    item_type: Mapped["ItemType"] = relationship(back_populates="type_fields", foreign_keys=[item_type_id])
    field: Mapped["FieldDefinition"] = relationship(foreign_keys=[field_id])
    base_field: Mapped[Optional["FieldDefinition"]] = relationship(foreign_keys=[base_field_id])


class Item(Base, TimestampedMixin):
    __tablename__ = "items"
    __table_args__ = (
        UniqueConstraint("library_id", "key", name="uq_item_library_key"),
        Index("ix_item_item_type_id", "item_type_id"),
    )

    item_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    library_id: Mapped[int] = mapped_column(Integer, nullable=False)
    key: Mapped[str] = mapped_column(String(8), nullable=False)
    item_type_id: Mapped[int] = mapped_column(ForeignKey("item_types.item_type_id"), nullable=False)
    version: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    item_type: Mapped["ItemType"] = relationship()
    data: Mapped[list["ItemData"]] = relationship(back_populates="item", cascade="all, delete-orphan")
    creators: Mapped[list["ItemCreator"]] = relationship(
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="ItemCreator.order_index",
    )
    tags: Mapped[list["ItemTag"]] = relationship(
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="ItemTag.item_tag_id",
    )
    collection_links: Mapped[list["CollectionItem"]] = relationship(back_populates="item", cascade="all, delete-orphan")


class ItemData(Base):
    __tablename__ = "item_data"
    __table_args__ = (UniqueConstraint("item_id", "field_id", name="uq_item_data_field"),)

    item_data_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_id: Mapped[int] = mapped_column(ForeignKey("items.item_id", ondelete="CASCADE"), nullable=False)
    field_id: Mapped[int] = mapped_column(ForeignKey("fields.field_id"), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    item: Mapped["Item"] = relationship(back_populates="data")
    field: Mapped["FieldDefinition"] = relationship()


class ItemCreator(Base):
    __tablename__ = "item_creators"
    __table_args__ = (Index("ix_item_creator_item_id", "item_id"),)

    item_creator_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_id: Mapped[int] = mapped_column(ForeignKey("items.item_id", ondelete="CASCADE"), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    creator_type: Mapped[str] = mapped_column(String(80), nullable=False)

    item: Mapped["Item"] = relationship(back_populates="creators")


class ItemTag(Base):
    __tablename__ = "item_tags"
    __table_args__ = (
        UniqueConstraint("item_id", "tag", name="uq_item_tag"),
        Index("ix_item_tag_tag", "tag"),
    )

    item_tag_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_id: Mapped[int] = mapped_column(ForeignKey("items.item_id", ondelete="CASCADE"), nullable=False)
    tag: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    item: Mapped["Item"] = relationship(back_populates="tags")


class Collection(Base, TimestampedMixin):
    __tablename__ = "collections"
    __table_args__ = (UniqueConstraint("library_id", "key", name="uq_collection_library_key"),)

    collection_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    library_id: Mapped[int] = mapped_column(Integer, nullable=False)
    key: Mapped[str] = mapped_column(String(8), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    item_links: Mapped[list["CollectionItem"]] = relationship(back_populates="collection", cascade="all, delete-orphan")


class CollectionItem(Base):
    __tablename__ = "collection_items"

    collection_id: Mapped[int] = mapped_column(
        ForeignKey("collections.collection_id", ondelete="CASCADE"), primary_key=True
    )
    item_id: Mapped[int] = mapped_column(ForeignKey("items.item_id", ondelete="CASCADE"), primary_key=True)

    collection: Mapped["Collection"] = relationship(back_populates="item_links")
    item: Mapped["Item"] = relationship(back_populates="collection_links")
