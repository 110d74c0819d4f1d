import json
from typing import Any, TypeVar

import pydantic

from local_crud.constants import ITEM_ACTIONS
from local_crud.services.store.base import RecordStore


class ValidationError(ValueError):
    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, **self.context}


class NotFoundError(LookupError):
    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, **self.context}


ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def require(condition: bool, message: str, **context: Any) -> None:
    if not condition:
        raise ValidationError(message, **context)


def parse_json_body(raw: bytes | str | dict | None) -> dict[str, Any]:
    if not raw:
        return {}
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValidationError("Invalid JSON in request body") from exc
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError("Invalid JSON in request body") from exc
    require(isinstance(data, dict), "Request body must be a JSON object")
    return data


def validate_item_type(store: RecordStore, item_type: str | None) -> str:
    require(bool(item_type), "itemType is required")
    if store.resolve_type(item_type) is None:
        raise ValidationError(f"Invalid itemType: {item_type}", validTypes=store.list_item_types())
    return item_type


def validate_action(action: str | None) -> str:
    require(bool(action), "action is required", validActions=list(ITEM_ACTIONS))
    require(action in ITEM_ACTIONS, f"Invalid action: {action}", validActions=list(ITEM_ACTIONS))
    return action


def require_key(key: str | None) -> str:
    require(bool(key), "key is required")
    return key


def require_item(store: RecordStore, key: str) -> Any:
    item = store.get_by_key(key)
    if item is None:
        raise NotFoundError("Item not found", key=key)
    return item


def load_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}" for error in exc.errors()
        )
        raise ValidationError(f"Invalid request body: {details}") from exc
