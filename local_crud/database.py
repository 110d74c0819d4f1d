from collections.abc import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from local_crud.config import get_settings


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:  # type: ignore[no-untyped-def]
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """Engine for the library database; sqlite connections enforce collection and item links."""
    built = create_engine(database_url, pool_pre_ping=True)
    if built.dialect.name == "sqlite":
        event.listen(built, "connect", _enable_sqlite_foreign_keys)
    return built


engine = build_engine(get_settings().database_url)
# Records are serialized after commit, so loaded attributes must stay readable.
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session]:
    with SessionLocal() as db:
        yield db
