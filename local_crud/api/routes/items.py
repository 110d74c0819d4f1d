from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from local_crud.api.deps import RawBody, StoreDep, handler_boundary
from local_crud.schemas import CreateItemRequest, ItemActionRequest, ItemCreatedResponse, ItemUpdatedResponse
from local_crud.services.items import apply_create, apply_update, delete_item, serialize_item
from local_crud.services.store.base import RecordStore
from local_crud.services.validation import (
    load_request,
    parse_json_body,
    require_item,
    require_key,
    validate_action,
)

router = APIRouter(tags=["items"])


@router.post("/items", status_code=201, response_model=ItemCreatedResponse)
def create_item(raw: bytes = RawBody, store: RecordStore = StoreDep) -> ItemCreatedResponse:
    with handler_boundary(store, "create"):
        request = load_request(CreateItemRequest, parse_json_body(raw))
        record = apply_create(store, request)
        info = store.describe(record)
    return ItemCreatedResponse(key=info.key, itemID=info.item_id, version=info.version, itemType=info.item_type)


@router.post("/item")
def item_action(raw: bytes = RawBody, store: RecordStore = StoreDep) -> Response:
    """Read, update or delete one item, selected by the body's ``action``."""
    with handler_boundary(store, "item"):
        request = load_request(ItemActionRequest, parse_json_body(raw))
        action = validate_action(request.action)
        record = require_item(store, require_key(request.key))

        if action == "get":
            return JSONResponse(status_code=200, content=serialize_item(store, record))

        if action == "update":
            apply_update(store, record, request)
            info = store.describe(record)
            updated = ItemUpdatedResponse(key=info.key, version=info.version, dateModified=info.date_modified)
            return JSONResponse(status_code=200, content=updated.model_dump())

        delete_item(store, record)
        return Response(status_code=204)
