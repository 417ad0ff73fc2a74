import uuid

from sqlmodel import Field, SQLModel


class Artwork(SQLModel, table=True):
    """An artwork submitted to an event by its owning artist."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    artist_id: str = Field(index=True)
    event_id: str | None = Field(default=None, index=True)
    title: str
    status: str = "EVENT"  # "PORTFOLIO", "EVENT", "MATCHED", "FLAGGED"
