import datetime as dt
from typing import Any

from sqlalchemy import DateTime
from sqlmodel import Field


def utc_naive_now() -> dt.datetime:
    """Naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return dt.datetime.now(dt.UTC).replace(tzinfo=None)


def created_at_field() -> Any:
    # Explicit column type: naive UTC storage, whatever sqlmodel maps datetime to by default
    return Field(default_factory=utc_naive_now, sa_type=DateTime(timezone=False))
