import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from local_crud.config import Settings, get_settings
from local_crud.database import get_db
from local_crud.services.store.base import RecordStore
from local_crud.services.store.sql import SqlRecordStore
from local_crud.services.validation import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def get_store(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> RecordStore:
    return SqlRecordStore(db, settings.library_id)


async def read_body(request: Request) -> bytes:
    return await request.body()


@contextmanager
def handler_boundary(store: RecordStore, operation: str) -> Iterator[None]:
    try:
        yield
    except HTTPException:
        raise
    except ValidationError as exc:
        store.rollback()
        raise HTTPException(status_code=400, detail=exc.to_payload()) from exc
    except NotFoundError as exc:
        store.rollback()
        raise HTTPException(status_code=404, detail=exc.to_payload()) from exc
    except Exception as exc:
        store.rollback()
        logger.exception("Local CRUD API error (%s)", operation)
        raise HTTPException(status_code=500, detail={"error": str(exc)}) from exc


StoreDep = Depends(get_store)
RawBody = Depends(read_body)
AppSettings = Depends(get_settings)
