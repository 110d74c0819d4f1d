import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_local_crud.db")
os.environ.setdefault("LIBRARY_ID", "1")
os.environ.setdefault("PLUGIN_VERSION", "1.0.0-test")
os.environ.setdefault("HOST_VERSION", "7.0.11")
os.environ.setdefault("URL_PREFIX", "")

from local_crud.config import get_settings  # noqa: E402
from local_crud.database import SessionLocal, engine  # noqa: E402
from local_crud.main import create_app  # noqa: E402
from local_crud.models.base import Base  # noqa: E402
from local_crud.services.schema import ensure_vocabulary  # noqa: E402
from local_crud.services.store.sql import SqlRecordStore  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db():
    get_settings.cache_clear()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        ensure_vocabulary(db)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db_session():
    with SessionLocal() as db:
        yield db
        db.rollback()


@pytest.fixture()
def store(db_session):
    return SqlRecordStore(db_session, library_id=1)
