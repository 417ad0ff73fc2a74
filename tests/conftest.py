"""Shared fixtures for matcher tests."""

from datetime import UTC, datetime

import pytest
import yaml

from artswap.core.config import DatabaseConfig, MatcherConfig
from artswap.models import Artist, Artwork, Event, Vote
from artswap.services.matching import EligibleVote
from artswap.services.storage import SwapStore

SPRING_SWAP = {
    "artists": [
        {"id": "alice", "email": "alice@example.com", "full_name": "Alice Painter"},
        {"id": "bob", "email": "bob@example.com", "full_name": "Bob Sculptor"},
    ],
    "events": [{"id": "spring", "name": "Spring Swap", "phase": "closed", "submission_limit": 5}],
    "artworks": [
        {"id": "sunset", "artist": "alice", "event": "spring", "title": "Sunset"},
        {"id": "mountain", "artist": "bob", "event": "spring", "title": "Mountain"},
    ],
    "votes": [
        {"artist": "alice", "artwork": "mountain", "event": "spring", "preference_order": 1},
        {"artist": "bob", "artwork": "sunset", "event": "spring", "preference_order": 2},
        {"artist": "bob", "artwork": "mountain", "event": "spring", "finalized": False},
    ],
}


def _eligible_vote(
    voter: str, artwork: str, owner: str, order: int | None = 1, vote_id: str | None = None
) -> EligibleVote:
    return EligibleVote(
        vote_id=vote_id or f"{voter}->{artwork}",
        voter_id=voter,
        artwork_id=artwork,
        owner_id=owner,
        preference_order=order,
    )


class SwapFactory:
    """Collects event, artist, artwork and vote records for one test event."""

    def __init__(self, event_id: str = "event-1", phase: str = "closed") -> None:
        self.event = Event(id=event_id, name="Spring Swap", phase=phase, submission_limit=3)
        self.records: list = [self.event]

    def artist(self, artist_id: str) -> str:
        self.records.append(
            Artist(id=artist_id, email=f"{artist_id}@test.com", full_name=artist_id.title())
        )
        return artist_id

    def artwork(self, artwork_id: str, owner: str) -> str:
        self.records.append(
            Artwork(id=artwork_id, artist_id=owner, event_id=self.event.id, title=artwork_id)
        )
        return artwork_id

    def vote(
        self,
        voter: str,
        artwork: str,
        order: int | None = 1,
        liked: bool = True,
        finalized: bool = True,
    ) -> None:
        self.records.append(
            Vote(
                artist_id=voter,
                artwork_id=artwork,
                event_id=self.event.id,
                liked=liked,
                preference_order=order,
                finalized_at=datetime.now(UTC) if finalized else None,
            )
        )


@pytest.fixture
def eligible():
    """Build an eligible vote: ``voter`` liked ``artwork`` owned by ``owner``."""
    return _eligible_vote


@pytest.fixture
def config(tmp_path):
    """Matcher config backed by a DuckDB file in a temp directory."""
    return MatcherConfig(database=DatabaseConfig(url=f"duckdb:///{tmp_path / 'swap.duckdb'}"))


@pytest.fixture
async def store(config):
    swap_store = SwapStore(config)
    yield swap_store
    await swap_store.close()


@pytest.fixture
def swap_factory():
    """Factory for extra swap events, e.g. ``swap_factory(phase="open")``."""
    return SwapFactory


@pytest.fixture
def factory(swap_factory):
    return swap_factory()


@pytest.fixture
def two_artist_swap(factory):
    """Artists a and b, each liking the other's artwork with rank 1."""
    a = factory.artist("artist-a")
    b = factory.artist("artist-b")
    art_a = factory.artwork("art-a", a)
    art_b = factory.artwork("art-b", b)
    factory.vote(a, art_b, order=1)
    factory.vote(b, art_a, order=1)
    return factory


@pytest.fixture
def fixture_path(tmp_path):
    """The two-artist spring swap written as a YAML fixture file."""
    path = tmp_path / "fixture.yaml"
    path.write_text(yaml.dump(SPRING_SWAP))
    return path
