from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ItemContentRequest(RequestModel):
    fields: dict[str, Any] | None = None
    creators: list[Any] | None = None
    tags: Any = None
    collections: list[Any] | None = None


class CreateItemRequest(ItemContentRequest):
    itemType: str | None = None


class ItemActionRequest(ItemContentRequest):
    action: str | None = None
    key: str | None = None


class SearchConditionRequest(RequestModel):
    condition: str | None = None
    operator: str | None = None
    value: str | int | float | bool | None = None
    required: bool | None = None


class SearchRequest(RequestModel):
    conditions: list[Any] | None = None
    limit: int | None = Field(default=None, ge=0)
    includeFullData: bool | None = None


class PingResponse(BaseModel):
    status: str
    plugin: str
    version: str
    hostVersion: str
    timestamp: str
    libraryID: int


class ItemCreatedResponse(BaseModel):
    key: str
    itemID: int
    version: int
    itemType: str


class ItemUpdatedResponse(BaseModel):
    key: str
    version: int
    dateModified: str | None = None


class ItemPayload(BaseModel):
    key: str
    itemID: int
    itemType: str
    version: int
    libraryID: int
    dateAdded: str | None = None
    dateModified: str | None = None
    fields: dict[str, str] = Field(default_factory=dict)
    creators: list[dict[str, Any]] = Field(default_factory=list)
    tags: list[dict[str, Any]] = Field(default_factory=list)
    collections: list[str] = Field(default_factory=list)


class SearchHit(BaseModel):
    key: str
    itemID: int
    itemType: str
    title: str = ""
    dateModified: str | None = None


class SearchResponse(BaseModel):
    total: int
    limit: int
    items: list[dict[str, Any]]
