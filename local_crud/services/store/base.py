from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


class StoreError(RuntimeError):
    pass


class InvalidFieldError(StoreError):
    def __init__(self, field_name: str, item_type: str, message: str | None = None):
        super().__init__(message or f"'{field_name}' is not a valid field for type '{item_type}'")
        self.field_name = field_name
        self.item_type = item_type


class InvalidTagError(StoreError):
    pass


@dataclass(frozen=True)
class RecordInfo:
    key: str
    item_id: int | None
    item_type: str
    version: int
    library_id: int
    date_added: str | None
    date_modified: str | None


@dataclass(frozen=True)
class QueryCondition:
    condition: str
    operator: str
    value: str
    required: bool = True


class RecordStore(ABC):
    """Capability interface over the library that owns the records.

    Mutators only stage changes on the record handle; nothing is persisted
    until ``commit`` (or ``erase``) is called. ``rollback`` discards anything
    staged since the last commit.
    """

    library_id: int

    @abstractmethod
    def list_item_types(self) -> list[str]:
        """Every item type name the store recognizes."""

    @abstractmethod
    def resolve_type(self, name: str) -> int | None:
        """Return the internal id for an item type name, or None if unknown."""

    @abstractmethod
    def describe(self, record: Any) -> RecordInfo:
        """Identity, type and bookkeeping attributes of a record."""

    @abstractmethod
    def type_field_names(self, item_type: str) -> list[str]:
        """Fields registered for the item type, in registration order."""

    @abstractmethod
    def create_record(self, item_type: str) -> Any: ...

    @abstractmethod
    def get_by_key(self, key: str) -> Any | None: ...

    @abstractmethod
    def get_many(self, record_ids: Sequence[int]) -> list[Any]: ...

    @abstractmethod
    def get_field(self, record: Any, field_name: str) -> str:
        """Raise InvalidFieldError when the field cannot be read for the record's type."""

    @abstractmethod
    def set_field(self, record: Any, field_name: str, value: Any) -> None:
        """Raise InvalidFieldError when the field cannot be written for the record's type."""

    @abstractmethod
    def get_creators(self, record: Any) -> list[dict[str, Any]]: ...

    @abstractmethod
    def set_creators(self, record: Any, creators: Sequence[Any]) -> None: ...

    @abstractmethod
    def get_tags(self, record: Any) -> list[dict[str, Any]]: ...

    @abstractmethod
    def add_tag(self, record: Any, tag: str, tag_type: int = 0) -> bool: ...

    @abstractmethod
    def remove_tag(self, record: Any, tag: str) -> bool: ...

    @abstractmethod
    def get_collections(self, record: Any) -> list[str]: ...

    @abstractmethod
    def resolve_collection(self, key: str) -> int | None: ...

    @abstractmethod
    def set_collections(self, record: Any, collection_ids: Sequence[int]) -> None: ...

    @abstractmethod
    def commit(self, record: Any) -> Any: ...

    @abstractmethod
    def erase(self, record: Any) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...

    @abstractmethod
    def query(self, conditions: Sequence[QueryCondition]) -> list[int]:
        """Return the ids of every matching record, in ascending id order."""
