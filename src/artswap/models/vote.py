import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class Vote(SQLModel, table=True):
    """An artist's vote on another artist's artwork within an event.

    Only votes with ``liked`` set and a ``finalized_at`` timestamp take part in
    matching. ``preference_order`` ranks the voter's likes, 1 being the most
    preferred; ``None`` means the like was left unranked. Table models skip
    pydantic validation, so the ``ge=1`` bound is advisory here; fixtures
    validate it on input and the vote loader treats smaller values as unranked.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    artist_id: str = Field(index=True)
    artwork_id: str = Field(index=True)
    event_id: str = Field(index=True)
    liked: bool = False
    preference_order: int | None = Field(default=None, ge=1)
    finalized_at: datetime | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
