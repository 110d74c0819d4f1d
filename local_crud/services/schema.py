from sqlalchemy import inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from local_crud.constants import BASE_FIELDS, ITEM_TYPE_FIELDS
from local_crud.models.base import Base
from local_crud.models.core import FieldDefinition, ItemType, ItemTypeField


def _split_entry(entry: str | tuple[str, str]) -> tuple[str, str | None]:
    if isinstance(entry, tuple):
        return entry
    return entry, None


def _vocabulary_field_names() -> list[str]:
    names = list(BASE_FIELDS)
    for entries in ITEM_TYPE_FIELDS.values():
        for entry in entries:
            field_name, base_name = _split_entry(entry)
            names.append(field_name)
            if base_name:
                names.append(base_name)
    return list(dict.fromkeys(names))


def ensure_runtime_schema(engine: Engine) -> None:
    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())
    if set(Base.metadata.tables).issubset(existing_tables):
        return
    Base.metadata.create_all(bind=engine)


def ensure_vocabulary(db: Session) -> None:
    fields = {row.name: row for row in db.scalars(select(FieldDefinition)).all()}
    for name in _vocabulary_field_names():
        if name not in fields:
            fields[name] = FieldDefinition(name=name)
            db.add(fields[name])

    item_types = {row.name: row for row in db.scalars(select(ItemType)).all()}
    for type_name, entries in ITEM_TYPE_FIELDS.items():
        if type_name in item_types:
            continue
        item_type = ItemType(name=type_name)
        db.add(item_type)
        for order_index, entry in enumerate(entries):
            field_name, base_name = _split_entry(entry)
            item_type.type_fields.append(
                ItemTypeField(
                    field=fields[field_name],
                    base_field=fields[base_name] if base_name else None,
                    order_index=order_index,
                )
            )
    db.commit()
