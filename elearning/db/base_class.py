from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    # set in Python so ordering by creation time keeps sub-second precision
    return datetime.now(timezone.utc)
