import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class Event(SQLModel, table=True):
    """A time-boxed swap round."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str = ""
    phase: str = "open"  # "open", "voting", "closed", "archived"
    submission_limit: int = 1
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
