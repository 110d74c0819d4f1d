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

__all__ = [
    "Collection",
    "CollectionItem",
    "FieldDefinition",
    "Item",
    "ItemCreator",
    "ItemData",
    "ItemTag",
    "ItemType",
    "ItemTypeField",
]
