"""Tests for event phase transitions and the close handler."""

import pytest

from artswap.core.errors import EventNotFoundError, InvalidPhaseTransitionError
from artswap.services.events import EventPhase, EventService, can_transition


class TestCanTransition:
    """Tests for the phase transition rule."""

    @pytest.mark.parametrize(
        ("from_phase", "to_phase"),
        [("open", "voting"), ("voting", "closed"), ("closed", "archived")],
    )
    def test_forward_steps_allowed(self, from_phase, to_phase):
        assert can_transition(from_phase, to_phase)

    @pytest.mark.parametrize(
        ("from_phase", "to_phase"),
        [
            ("open", "closed"),
            ("closed", "voting"),
            ("voting", "voting"),
            ("archived", "open"),
            ("draft", "open"),
        ],
    )
    def test_other_changes_refused(self, from_phase, to_phase):
        assert not can_transition(from_phase, to_phase)

    def test_accepts_enum_members(self):
        assert can_transition(EventPhase.VOTING, EventPhase.CLOSED)


class TestEventService:
    """Tests for EventService."""

    async def test_transition_persists_phase(self, config, store, swap_factory):
        await store.add_all(swap_factory(phase="open").records)

        event = await EventService(config, store).transition("event-1", EventPhase.VOTING)

        assert event.phase == "voting"
        stored = await store.events.get_event("event-1")
        assert stored.phase == "voting"

    async def test_transition_unknown_event(self, config, store):
        with pytest.raises(EventNotFoundError):
            await EventService(config, store).transition("missing", EventPhase.VOTING)

    async def test_transition_skipping_phase_refused(self, config, store, swap_factory):
        await store.add_all(swap_factory(phase="open").records)

        with pytest.raises(InvalidPhaseTransitionError):
            await EventService(config, store).transition("event-1", EventPhase.CLOSED)

        assert (await store.events.get_event("event-1")).phase == "open"

    async def test_close_event_runs_matching(self, config, store, two_artist_swap):
        """Test closing voting creates the event's matches."""
        two_artist_swap.event.phase = "voting"
        await store.add_all(two_artist_swap.records)

        summary = await EventService(config, store).close_event("event-1")

        assert summary.matches_created == 1
        assert summary.total_matches == 1
        assert summary.warnings == []
        assert (await store.events.get_event("event-1")).phase == "closed"
        assert len(await store.matches.list_matches("event-1")) == 1

    async def test_close_event_reports_partial_failures(self, config, store, two_artist_swap):
        """Test persistence conflicts surface as warnings, not errors."""
        two_artist_swap.event.phase = "voting"
        two_artist_swap.vote("artist-a", "ghost-artwork", order=3)
        await store.add_all(two_artist_swap.records)
        await store.matches.upsert_pair("event-1", "art-b", "art-z")

        summary = await EventService(config, store).close_event("event-1")

        assert summary.matches_created == 0
        assert summary.skipped_votes == 1
        assert len(summary.warnings) == 2
        assert (await store.events.get_event("event-1")).phase == "closed"

    async def test_close_already_closed_event(self, config, store, two_artist_swap):
        await store.add_all(two_artist_swap.records)

        with pytest.raises(InvalidPhaseTransitionError):
            await EventService(config, store).close_event("event-1")
