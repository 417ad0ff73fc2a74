"""Load swap data (artists, events, artworks, votes) from YAML fixtures."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pydantic
import yaml
from pydantic import BaseModel, Field
from sqlmodel import SQLModel

from artswap.core.config import PhaseName
from artswap.core.errors import FixtureError
from artswap.models import Artist, Artwork, Event, Vote


class ArtistFixture(BaseModel):
    id: str
    email: str
    full_name: str


class EventFixture(BaseModel):
    id: str
    name: str = ""
    phase: PhaseName = "voting"
    submission_limit: int = Field(default=1, ge=1, le=20)


class ArtworkFixture(BaseModel):
    id: str
    artist: str
    event: str
    title: str


class VoteFixture(BaseModel):
    """A vote entry; ``finalized`` stamps finalized_at with the load time."""

    artist: str
    artwork: str
    event: str
    liked: bool = True
    preference_order: int | None = Field(default=None, ge=1)
    finalized: bool = True


class SwapFixture(BaseModel):
    artists: list[ArtistFixture] = Field(default_factory=list)
    events: list[EventFixture] = Field(default_factory=list)
    artworks: list[ArtworkFixture] = Field(default_factory=list)
    votes: list[VoteFixture] = Field(default_factory=list)

    def to_records(self, now: datetime | None = None) -> list[SQLModel]:
        """Convert fixture entries to table records."""
        stamp = now or datetime.now(UTC)
        records: list[SQLModel] = []
        records.extend(Artist(id=a.id, email=a.email, full_name=a.full_name) for a in self.artists)
        records.extend(
            Event(id=e.id, name=e.name, phase=e.phase, submission_limit=e.submission_limit)
            for e in self.events
        )
        records.extend(
            Artwork(id=w.id, artist_id=w.artist, event_id=w.event, title=w.title)
            for w in self.artworks
        )
        records.extend(
            Vote(
                artist_id=v.artist,
                artwork_id=v.artwork,
                event_id=v.event,
                liked=v.liked,
                preference_order=v.preference_order,
                finalized_at=stamp if v.finalized else None,
            )
            for v in self.votes
        )
        return records


def load_fixture(path: str | Path) -> SwapFixture:
    """Load and validate a YAML fixture file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        FixtureError: If the content doesn't match the fixture schema.
    """
    fixture_path = Path(path)
    if not fixture_path.exists():
        msg = f"Fixture file not found: {fixture_path}"
        raise FileNotFoundError(msg)

    with fixture_path.open() as f:
        data = yaml.safe_load(f) or {}

    try:
        return SwapFixture.model_validate(data)
    except pydantic.ValidationError as e:
        raise FixtureError(str(fixture_path), str(e)) from e
