"""Tests for shaping loaded vote rows."""

from artswap.models import Artist, Artwork, Vote
from artswap.services.matching.votes import EligibleVote, shape_votes


def _vote(vote_id: str, voter: str, artwork: str, order: int | None = 1) -> Vote:
    return Vote(
        id=vote_id,
        artist_id=voter,
        artwork_id=artwork,
        event_id="event-1",
        liked=True,
        preference_order=order,
    )


ARTIST_A = Artist(id="a", email="a@test.com", full_name="A")
ARTIST_B = Artist(id="b", email="b@test.com", full_name="B")
ARTWORK_A = Artwork(id="art-a", artist_id="a", event_id="event-1", title="Sunset")
ARTWORK_B = Artwork(id="art-b", artist_id="b", event_id="event-1", title="Mountain")


class TestShapeVotes:
    """Tests for shape_votes."""

    def test_enriches_with_owner(self):
        """Test each vote carries the voted artwork's owner."""
        loaded = shape_votes([(_vote("v1", "a", "art-b", 2), ARTWORK_B, ARTIST_A)])

        assert loaded.votes == [
            EligibleVote(
                vote_id="v1", voter_id="a", artwork_id="art-b", owner_id="b", preference_order=2
            )
        ]
        assert loaded.skipped == 0

    def test_missing_artwork_skipped(self):
        """Test a vote whose artwork is gone is skipped and counted."""
        rows = [
            (_vote("v1", "a", "ghost"), None, ARTIST_A),
            (_vote("v2", "b", "art-a"), ARTWORK_A, ARTIST_B),
        ]

        loaded = shape_votes(rows)

        assert [v.vote_id for v in loaded.votes] == ["v2"]
        assert loaded.skipped == 1

    def test_missing_artist_skipped(self):
        """Test a vote cast by an unknown artist is skipped and counted."""
        loaded = shape_votes([(_vote("v1", "nobody", "art-a"), ARTWORK_A, None)])

        assert len(loaded) == 0
        assert loaded.skipped == 1

    def test_unranked_preserved(self):
        loaded = shape_votes([(_vote("v1", "a", "art-b", None), ARTWORK_B, ARTIST_A)])
        assert loaded.votes[0].preference_order is None

    def test_empty_rows(self):
        loaded = shape_votes([])
        assert len(loaded) == 0
        assert loaded.skipped == 0

    def test_non_positive_rank_treated_as_unranked(self):
        """Test a rank below 1 is not passed through as a preference."""
        rows = [
            (_vote("v1", "a", "art-b", 0), ARTWORK_B, ARTIST_A),
            (_vote("v2", "b", "art-a", -3), ARTWORK_A, ARTIST_B),
        ]

        loaded = shape_votes(rows)

        assert [v.preference_order for v in loaded.votes] == [None, None]
        assert loaded.skipped == 0
