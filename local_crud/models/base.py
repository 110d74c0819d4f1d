import secrets
from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from local_crud.constants import KEY_ALPHABET, KEY_LENGTH
from local_crud.services.utils import now_utc


def generate_key() -> str:
    return "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_LENGTH))


class Base(DeclarativeBase):
    pass


class TimestampedMixin:
    date_added: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc, nullable=False)
    date_modified: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc, nullable=False)
