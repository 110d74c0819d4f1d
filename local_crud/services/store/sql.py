from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from local_crud.constants import DEFAULT_CREATOR_TYPE
from local_crud.models.base import generate_key
from local_crud.models.core import (
    Collection,
    CollectionItem,
    FieldDefinition,
    Item,
    ItemCreator,
    ItemData,
    ItemTag,
    ItemType,
    ItemTypeField,
)
from local_crud.services.store.base import (
    InvalidFieldError,
    InvalidTagError,
    QueryCondition,
    RecordInfo,
    RecordStore,
    StoreError,
)
from local_crud.services.utils import format_timestamp, now_utc

logger = logging.getLogger(__name__)

SEARCH_OPERATORS = {
    "is",
    "isNot",
    "contains",
    "doesNotContain",
    "beginsWith",
    "isLessThan",
    "isGreaterThan",
    "isBefore",
    "isAfter",
}
_NEGATED_OPERATORS = {"isNot": "is", "doesNotContain": "contains"}


@dataclass
class _TypeSchema:
    item_type_id: int
    name: str
    field_ids: dict[str, int] = field(default_factory=dict)
    base_map: dict[str, str] = field(default_factory=dict)


@dataclass
class _Vocabulary:
    types: dict[str, _TypeSchema]
    type_names: dict[int, str]
    field_names: dict[int, str]


def _as_number(value: str) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _compare(candidate: str, operator: str, value: str) -> bool:
    if operator == "is":
        return candidate == value
    if operator == "contains":
        return value.casefold() in candidate.casefold()
    if operator == "beginsWith":
        return candidate.casefold().startswith(value.casefold())
    if operator in {"isLessThan", "isGreaterThan"}:
        left, right = _as_number(candidate), _as_number(value)
        if left is None or right is None:
            return False
        return left < right if operator == "isLessThan" else left > right
    if operator in {"isBefore", "isAfter"}:
        if not candidate:
            return False
        return candidate < value if operator == "isBefore" else candidate > value
    raise StoreError(f"Invalid operator '{operator}'")


class SqlRecordStore(RecordStore):
    """Record store backed by the library tables of an SQLAlchemy database."""

    def __init__(self, db: Session, library_id: int):
        self.db = db
        self.library_id = library_id
        self._vocabulary: _Vocabulary | None = None

    # Vocabulary

    def _vocab(self) -> _Vocabulary:
        if self._vocabulary is None:
            types: dict[str, _TypeSchema] = {}
            rows = self.db.scalars(
                select(ItemType).options(
                    selectinload(ItemType.type_fields).selectinload(ItemTypeField.field),
                    selectinload(ItemType.type_fields).selectinload(ItemTypeField.base_field),
                )
            ).all()
            for row in rows:
                schema = _TypeSchema(item_type_id=row.item_type_id, name=row.name)
                for type_field in row.type_fields:
                    schema.field_ids[type_field.field.name] = type_field.field_id
                    if type_field.base_field is not None:
                        schema.base_map[type_field.base_field.name] = type_field.field.name
                types[row.name] = schema
            field_names = {row.field_id: row.name for row in self.db.scalars(select(FieldDefinition)).all()}
            self._vocabulary = _Vocabulary(
                types=types,
                type_names={schema.item_type_id: name for name, schema in types.items()},
                field_names=field_names,
            )
        return self._vocabulary

    def _schema_for(self, record: Item) -> _TypeSchema:
        vocab = self._vocab()
        return vocab.types[vocab.type_names[record.item_type_id]]

    def list_item_types(self) -> list[str]:
        vocab = self._vocab()
        return [vocab.type_names[type_id] for type_id in sorted(vocab.type_names)]

    def resolve_type(self, name: str) -> int | None:
        schema = self._vocab().types.get(name)
        return schema.item_type_id if schema else None

    def type_field_names(self, item_type: str) -> list[str]:
        schema = self._vocab().types.get(item_type)
        if schema is None:
            raise StoreError(f"Unknown item type: {item_type}")
        return list(schema.field_ids)

    def describe(self, record: Item) -> RecordInfo:
        return RecordInfo(
            key=record.key,
            item_id=record.item_id,
            item_type=self._schema_for(record).name,
            version=record.version,
            library_id=record.library_id,
            date_added=format_timestamp(record.date_added),
            date_modified=format_timestamp(record.date_modified),
        )

    # Records

    def _new_key(self) -> str:
        while True:
            key = generate_key()
            if self.get_by_key(key) is None:
                return key

    def create_record(self, item_type: str) -> Item:
        schema = self._vocab().types.get(item_type)
        if schema is None:
            raise StoreError(f"Unknown item type: {item_type}")
        return Item(
            library_id=self.library_id,
            key=self._new_key(),
            item_type_id=schema.item_type_id,
            version=0,
        )

    def get_by_key(self, key: str) -> Item | None:
        return self.db.scalar(select(Item).where(Item.library_id == self.library_id, Item.key == key))

    def get_many(self, record_ids: Sequence[int]) -> list[Item]:
        if not record_ids:
            return []
        rows = self.db.scalars(select(Item).where(Item.item_id.in_(list(record_ids)))).all()
        by_id = {row.item_id: row for row in rows}
        return [by_id[record_id] for record_id in record_ids if record_id in by_id]

    # Fields

    def _field_id(self, record: Item, field_name: str) -> int:
        schema = self._schema_for(record)
        if field_name in schema.field_ids:
            return schema.field_ids[field_name]
        if field_name in schema.base_map:
            return schema.field_ids[schema.base_map[field_name]]
        if field_name not in self._vocab().field_names.values():
            raise InvalidFieldError(field_name, schema.name, f"Unknown field '{field_name}'")
        raise InvalidFieldError(field_name, schema.name)

    def get_field(self, record: Item, field_name: str) -> str:
        field_id = self._field_id(record, field_name)
        for row in record.data:
            if row.field_id == field_id:
                return row.value
        return ""

    def set_field(self, record: Item, field_name: str, value: Any) -> None:
        field_id = self._field_id(record, field_name)
        if value is None:
            value = ""
        elif isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise InvalidFieldError(
                field_name,
                self._schema_for(record).name,
                f"Value for '{field_name}' must be a string",
            )
        value = str(value)

        existing = next((row for row in record.data if row.field_id == field_id), None)
        if not value:
            if existing is not None:
                record.data.remove(existing)
            return
        if existing is not None:
            existing.value = value
        else:
            record.data.append(ItemData(field_id=field_id, value=value))

    # Creators

    def get_creators(self, record: Item) -> list[dict[str, Any]]:
        creators: list[dict[str, Any]] = []
        for row in record.creators:
            if row.name is not None and row.first_name is None and row.last_name is None:
                creators.append({"name": row.name, "creatorType": row.creator_type})
            else:
                creators.append(
                    {
                        "firstName": row.first_name or "",
                        "lastName": row.last_name or "",
                        "creatorType": row.creator_type,
                    }
                )
        return creators

    def set_creators(self, record: Item, creators: Sequence[Any]) -> None:
        rows: list[ItemCreator] = []
        for index, creator in enumerate(creators):
            if not isinstance(creator, dict):
                raise StoreError(f"Creator at position {index} must be an object")
            first_name = creator.get("firstName")
            last_name = creator.get("lastName")
            name = creator.get("name")
            if first_name is None and last_name is None and name is None:
                raise StoreError(f"Creator at position {index} has no name")
            rows.append(
                ItemCreator(
                    order_index=index,
                    first_name=None if first_name is None else str(first_name),
                    last_name=None if last_name is None else str(last_name),
                    name=None if name is None else str(name),
                    creator_type=str(creator.get("creatorType") or DEFAULT_CREATOR_TYPE),
                )
            )
        record.creators.clear()
        record.creators.extend(rows)

    # Tags

    def get_tags(self, record: Item) -> list[dict[str, Any]]:
        return [{"tag": row.tag, "type": row.type} for row in record.tags]

    def add_tag(self, record: Item, tag: str, tag_type: int = 0) -> bool:
        if not isinstance(tag, str):
            raise InvalidTagError(f"Tag must be a string, got {type(tag).__name__}")
        name = tag.strip()
        if not name:
            return False
        try:
            tag_type = int(tag_type)
        except (TypeError, ValueError) as exc:
            raise InvalidTagError(f"Invalid type for tag '{name}': {tag_type!r}") from exc

        existing = next((row for row in record.tags if row.tag == name), None)
        if existing is not None:
            if existing.type == tag_type:
                return False
            existing.type = tag_type
            return True
        record.tags.append(ItemTag(tag=name, type=tag_type))
        return True

    def remove_tag(self, record: Item, tag: str) -> bool:
        existing = next((row for row in record.tags if row.tag == tag), None)
        if existing is None:
            return False
        record.tags.remove(existing)
        if record.item_id is not None:
            # Deletes must reach the database before a tag with the same name can be re-added.
            self.db.flush()
        return True

    # Collections

    def get_collections(self, record: Item) -> list[str]:
        return [link.collection.key for link in record.collection_links]

    def resolve_collection(self, key: str) -> int | None:
        if not isinstance(key, str) or not key:
            return None
        return self.db.scalar(
            select(Collection.collection_id).where(
                Collection.library_id == self.library_id,
                Collection.key == key,
            )
        )

    def set_collections(self, record: Item, collection_ids: Sequence[int]) -> None:
        wanted = list(dict.fromkeys(collection_ids))
        for link in list(record.collection_links):
            if link.collection_id not in wanted:
                record.collection_links.remove(link)
        present = {link.collection_id for link in record.collection_links}
        for collection_id in wanted:
            if collection_id not in present:
                record.collection_links.append(
                    CollectionItem(collection=self.db.get(Collection, collection_id))
                )

    def create_collection(self, name: str, key: str | None = None) -> Collection:
        collection = Collection(library_id=self.library_id, key=key or generate_key(), name=name)
        self.db.add(collection)
        self.db.commit()
        return collection

    def list_collections(self) -> list[Collection]:
        stmt = select(Collection).where(Collection.library_id == self.library_id).order_by(Collection.name.asc())
        return list(self.db.scalars(stmt))

    # Persistence

    def commit(self, record: Item) -> Item:
        record.version += 1
        record.date_modified = now_utc()
        self.db.add(record)
        self.db.commit()
        return record

    def erase(self, record: Item) -> None:
        self.db.delete(record)
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    # Search

    def _condition_reader(self, condition: str) -> Callable[[Item], list[str]]:
        if condition == "itemType":
            return lambda record: [self._schema_for(record).name]
        if condition == "key":
            return lambda record: [record.key]
        if condition == "tag":
            return lambda record: [row.tag for row in record.tags]
        if condition == "collection":
            return self.get_collections
        if condition == "creator":
            return self._creator_names
        if condition == "dateAdded":
            return lambda record: [format_timestamp(record.date_added) or ""]
        if condition == "dateModified":
            return lambda record: [format_timestamp(record.date_modified) or ""]
        if condition == "quicksearch-titleCreatorYear":
            return lambda record: [
                self._read_quietly(record, "title"),
                self._read_quietly(record, "date")[:4],
                *self._creator_names(record),
            ]
        if condition == "quicksearch-fields":
            return lambda record: [row.value for row in record.data] + self._creator_names(record)
        if condition == "quicksearch-everything":
            return lambda record: (
                [row.value for row in record.data] + self._creator_names(record) + [row.tag for row in record.tags]
            )
        if condition in self._vocab().field_names.values():
            return lambda record: [self._read_quietly(record, condition)]
        raise StoreError(f"Invalid condition '{condition}'")

    def _creator_names(self, record: Item) -> list[str]:
        names = []
        for row in record.creators:
            if row.name is not None:
                names.append(row.name)
            names.append(" ".join(part for part in (row.first_name, row.last_name) if part))
        return [name for name in names if name]

    def _read_quietly(self, record: Item, field_name: str) -> str:
        try:
            return self.get_field(record, field_name)
        except InvalidFieldError:
            return ""

    def query(self, conditions: Sequence[QueryCondition]) -> list[int]:
        compiled = []
        for condition in conditions:
            if condition.operator not in SEARCH_OPERATORS:
                raise StoreError(f"Invalid operator '{condition.operator}' for condition '{condition.condition}'")
            compiled.append((condition, self._condition_reader(condition.condition)))

        def matches(record: Item, condition: QueryCondition, reader: Callable[[Item], list[str]]) -> bool:
            values = reader(record)
            positive = _NEGATED_OPERATORS.get(condition.operator)
            if positive is not None:
                return not any(_compare(value, positive, condition.value) for value in values)
            return any(_compare(value, condition.operator, condition.value) for value in values)

        required = [(c, reader) for c, reader in compiled if c.required]
        optional = [(c, reader) for c, reader in compiled if not c.required]

        stmt = (
            select(Item)
            .where(Item.library_id == self.library_id)
            .options(
                selectinload(Item.data),
                selectinload(Item.creators),
                selectinload(Item.tags),
                selectinload(Item.collection_links).selectinload(CollectionItem.collection),
            )
            .order_by(Item.item_id.asc())
        )
        matched: list[int] = []
        for record in self.db.scalars(stmt).all():
            if not all(matches(record, c, reader) for c, reader in required):
                continue
            if optional and not any(matches(record, c, reader) for c, reader in optional):
                continue
            matched.append(record.item_id)
        logger.debug("Query with %d conditions matched %d items", len(compiled), len(matched))
        return matched
