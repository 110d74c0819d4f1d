from local_crud.database import SessionLocal
from local_crud.schemas import CreateItemRequest
from local_crud.services.items import apply_create
from local_crud.services.store.sql import SqlRecordStore


def create_collection(name: str, key: str) -> str:
    with SessionLocal() as db:
        SqlRecordStore(db, library_id=1).create_collection(name, key=key)
    return key


def create_item(store: SqlRecordStore, item_type: str = "book", **payload):
    request = CreateItemRequest(itemType=item_type, **payload)
    return apply_create(store, request)


def create_item_via_api(client, item_type: str = "book", **payload) -> dict:
    response = client.post("/items", json={"itemType": item_type, **payload})
    assert response.status_code == 201, response.text
    return response.json()


def item_action(client, action: str, key: str, **payload):
    return client.post("/item", json={"action": action, "key": key, **payload})
