"""Tests for loading qualifying votes."""


class TestLoadQualifyingVotes:
    """Tests for VoteRepository.load_qualifying_votes."""

    async def test_filters_liked_and_finalized(self, store, factory):
        a, b = factory.artist("artist-a"), factory.artist("artist-b")
        art_b = factory.artwork("art-b", b)
        factory.vote(a, art_b, order=1)
        factory.vote(a, art_b, order=2, liked=False)
        factory.vote(a, art_b, order=3, finalized=False)
        await store.add_all(factory.records)

        rows = await store.votes.load_qualifying_votes("event-1")

        assert len(rows) == 1
        vote, artwork, artist = rows[0]
        assert vote.preference_order == 1
        assert artwork.artist_id == "artist-b"
        assert artist.id == "artist-a"

    async def test_dangling_references_come_back_as_none(self, store, factory):
        """Test missing artwork and artist rows are outer-joined as None."""
        factory.vote("ghost-artist", "ghost-artwork")
        await store.add_all(factory.records)

        rows = await store.votes.load_qualifying_votes("event-1")

        assert len(rows) == 1
        assert rows[0][1] is None
        assert rows[0][2] is None

    async def test_unknown_event(self, store):
        assert await store.votes.load_qualifying_votes("missing") == []
