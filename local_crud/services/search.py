from __future__ import annotations

import logging
from typing import Any

from local_crud.constants import HIDDEN_ITEM_TYPES
from local_crud.schemas import SearchConditionRequest, SearchHit, SearchRequest
from local_crud.services.items import serialize_item
from local_crud.services.store.base import InvalidFieldError, QueryCondition, RecordStore
from local_crud.services.validation import load_request

logger = logging.getLogger(__name__)


def build_conditions(conditions: list[Any]) -> list[QueryCondition]:
    if not conditions:
        return [QueryCondition("itemType", "isNot", item_type) for item_type in HIDDEN_ITEM_TYPES]

    built: list[QueryCondition] = []
    for entry in conditions:
        if isinstance(entry, dict):
            condition = load_request(SearchConditionRequest, entry)
        elif isinstance(entry, SearchConditionRequest):
            condition = entry
        else:
            logger.info("Skipped search condition that is not an object: %r", entry)
            continue
        if not condition.condition:
            continue
        built.append(
            QueryCondition(
                condition=condition.condition,
                operator=condition.operator or "contains",
                value="" if condition.value is None else str(condition.value),
                required=condition.required is not False,
            )
        )
    return built


def compact_item(store: RecordStore, record: Any) -> dict[str, Any]:
    info = store.describe(record)
    try:
        title = store.get_field(record, "title")
    except InvalidFieldError:
        title = ""
    return SearchHit(
        key=info.key,
        itemID=info.item_id,
        itemType=info.item_type,
        title=title or "",
        dateModified=info.date_modified,
    ).model_dump()


def search_items(store: RecordStore, request: SearchRequest, *, default_limit: int) -> tuple[list[dict[str, Any]], int]:
    limit = request.limit or default_limit
    conditions = build_conditions(request.conditions or [])

    item_ids = store.query(conditions)
    if len(item_ids) > limit:
        item_ids = item_ids[:limit]

    records = store.get_many(item_ids)
    if request.includeFullData:
        results = [serialize_item(store, record) for record in records]
    else:
        results = [compact_item(store, record) for record in records]

    logger.info("Search returned %d items", len(results))
    return results, limit
