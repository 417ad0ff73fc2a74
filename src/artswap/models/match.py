import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


def pair_key(event_id: str, artwork_a_id: str, artwork_b_id: str) -> str:
    """Order-independent identity of an artwork pair within an event."""
    first, second = sorted((artwork_a_id, artwork_b_id))
    return f"{event_id}:{first}:{second}"


class Match(SQLModel, table=True):
    """A persisted swap between two mutually liked artworks."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    event_id: str = Field(index=True)
    artwork1_id: str = Field(index=True)
    artwork2_id: str = Field(index=True)
    pair_key: str = Field(unique=True, index=True)
    status: str = "completed"
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
