import argparse

from local_crud.config import get_settings
from local_crud.database import SessionLocal, engine
from local_crud.services.schema import ensure_runtime_schema
from local_crud.services.store.sql import SqlRecordStore


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create and list collections of the local library")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a collection")
    create.add_argument("name", help="Collection name")
    create.add_argument("--key", help="Explicit 8-character key (generated when omitted)")

    subparsers.add_parser("list", help="List collections")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    settings = get_settings()
    ensure_runtime_schema(engine)

    with SessionLocal() as db:
        store = SqlRecordStore(db, settings.library_id)
        if args.command == "create":
            if args.key and store.resolve_collection(args.key) is not None:
                raise SystemExit(f"Collection key already exists: {args.key}")
            collection = store.create_collection(args.name, key=args.key)
            print(f"created {collection.key} {collection.name}")
            return 0

        collections = store.list_collections()
        if not collections:
            print("No collections found")
        for collection in collections:
            print(f"{collection.key}\t{collection.name}\t{len(collection.item_links)} item(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
