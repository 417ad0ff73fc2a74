import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class Notification(SQLModel, table=True):
    """In-app notification addressed to an artist."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    artist_id: str = Field(index=True)
    type: str = Field(index=True)  # "MATCH", "EVENT", "FLAG", "OTHER"
    message: str
    read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
