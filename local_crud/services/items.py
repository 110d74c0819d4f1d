"""Mapping between the wire representation of an item and store records."""

import logging
from collections.abc import Iterable
from typing import Any

from local_crud.constants import FALLBACK_FIELDS
from local_crud.schemas import CreateItemRequest, ItemContentRequest, ItemPayload
from local_crud.services.store.base import InvalidFieldError, InvalidTagError, RecordStore
from local_crud.services.validation import validate_item_type

logger = logging.getLogger(__name__)


def collect_fields(store: RecordStore, record: Any) -> dict[str, str]:
    info = store.describe(record)
    fields: dict[str, str] = {}
    for field_name in store.type_field_names(info.item_type):
        value = store.get_field(record, field_name)
        if value:
            fields[field_name] = value
    for field_name in FALLBACK_FIELDS:
        if field_name in fields:
            continue
        try:
            value = store.get_field(record, field_name)
        except InvalidFieldError:
            continue
        if value:
            fields[field_name] = value
    return fields


def serialize_item(store: RecordStore, record: Any) -> dict[str, Any]:
    info = store.describe(record)
    payload = ItemPayload(
        key=info.key,
        itemID=info.item_id,
        itemType=info.item_type,
        version=info.version,
        libraryID=info.library_id,
        dateAdded=info.date_added,
        dateModified=info.date_modified,
        fields=collect_fields(store, record),
        creators=store.get_creators(record),
        tags=store.get_tags(record),
        collections=store.get_collections(record),
    )
    return payload.model_dump()


def apply_fields(store: RecordStore, record: Any, fields: dict[str, Any]) -> None:
    for field_name, value in fields.items():
        try:
            store.set_field(record, field_name, value)
        except InvalidFieldError as exc:
            logger.warning("Could not set field %s on %s: %s", field_name, store.describe(record).key, exc)


def apply_tags(store: RecordStore, record: Any, tags: Any) -> None:
    if not isinstance(tags, list):
        if tags is not None:
            logger.warning("Ignored tags value that is not a list: %r", tags)
        return
    for entry in tags:
        try:
            if isinstance(entry, str):
                store.add_tag(record, entry)
            elif isinstance(entry, dict) and entry.get("tag"):
                store.add_tag(record, entry["tag"], entry.get("type") or 0)
            else:
                logger.warning("Skipped tag entry without a tag name: %r", entry)
        except InvalidTagError as exc:
            logger.warning("Skipped invalid tag entry %r: %s", entry, exc)


def resolve_collections(store: RecordStore, keys: Iterable[Any]) -> list[int]:
    collection_ids: list[int] = []
    for key in keys:
        collection_id = store.resolve_collection(key)
        if collection_id is None:
            logger.info("Skipped unknown collection key %r", key)
            continue
        collection_ids.append(collection_id)
    return collection_ids


def apply_create(store: RecordStore, request: CreateItemRequest) -> Any:
    item_type = validate_item_type(store, request.itemType)
    record = store.create_record(item_type)

    if request.fields:
        apply_fields(store, record, request.fields)
    if request.creators is not None:
        store.set_creators(record, request.creators)
    if request.tags:
        apply_tags(store, record, request.tags)
    if request.collections:
        collection_ids = resolve_collections(store, request.collections)
        # An empty resolved set leaves membership untouched on create.
        if collection_ids:
            store.set_collections(record, collection_ids)

    store.commit(record)
    logger.info("Created item %s", store.describe(record).key)
    return record


def apply_update(store: RecordStore, record: Any, request: ItemContentRequest) -> Any:
    provided = request.model_fields_set

    if request.fields:
        apply_fields(store, record, request.fields)
    if request.creators is not None:
        store.set_creators(record, request.creators)
    if "tags" in provided:
        for existing in store.get_tags(record):
            store.remove_tag(record, existing["tag"])
        apply_tags(store, record, request.tags)
    if "collections" in provided:
        store.set_collections(record, resolve_collections(store, request.collections or []))

    store.commit(record)
    logger.info("Updated item %s", store.describe(record).key)
    return record


def delete_item(store: RecordStore, record: Any) -> str:
    key = store.describe(record).key
    store.erase(record)
    logger.info("Deleted item %s", key)
    return key
