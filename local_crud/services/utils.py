from datetime import UTC, datetime

from local_crud.constants import TIMESTAMP_FORMAT


def now_utc() -> datetime:
    return datetime.now(UTC)


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime(TIMESTAMP_FORMAT)
