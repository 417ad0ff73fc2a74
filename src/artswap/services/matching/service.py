"""Match service: load votes, detect mutual likes, resolve, persist."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError

from artswap.core.config import MatcherConfig
from artswap.core.errors import EventPhaseError, MatchConflictError
from artswap.models import Match, Notification
from artswap.services.storage import SwapStore

from .pairing import CandidatePair, find_mutual_likes, resolve_conflicts
from .votes import LoadedVotes, shape_votes

logger = structlog.get_logger()


@dataclass
class PersistFailure:
    """A resolved pair whose match record could not be written."""

    pair: CandidatePair
    error: str


@dataclass
class MatchRunResult:
    """Outcome of one matching pass over an event.

    Attributes:
        event_id: Event that was matched.
        pairs: Resolved pairs in ascending combined-score order, whether or not
            their record was newly written.
        created: Pairs whose match record was created by this run.
        existing: Pairs whose match record already existed.
        failures: Pairs whose match record could not be written.
        skipped_votes: Vote rows dropped for missing artwork or artist.
        notified: Number of match notifications written.
    """

    event_id: str
    pairs: list[CandidatePair] = field(default_factory=list)
    created: list[CandidatePair] = field(default_factory=list)
    existing: list[CandidatePair] = field(default_factory=list)
    failures: list[PersistFailure] = field(default_factory=list)
    skipped_votes: int = 0
    notified: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dicts(self) -> list[dict[str, Any]]:
        return [pair.to_dict() for pair in self.pairs]


class MatchService:
    """Orchestrates one matching pass per event.

    Steps run strictly in sequence: vote loading, mutual-like detection,
    conflict resolution, then one persistence write per accepted pair. Runs for
    the same event are serialized on the store's event lock, so services
    sharing a store never overlap; callers in other processes must serialize
    on their own.
    """

    def __init__(self, config: MatcherConfig, store: SwapStore) -> None:
        """Initialize match service.

        Args:
            config: Matcher configuration.
            store: Storage layer for votes, events, matches and notifications.
        """
        self.config = config
        self.store = store

    async def calculate_matches(self, event_id: str) -> MatchRunResult:
        """Calculate and persist the matching for an event.

        An unknown event or an event without qualifying votes yields an empty
        result. Persistence errors are collected per pair in
        ``MatchRunResult.failures``; pairs written before a failure stay
        written.

        Args:
            event_id: Event identifier.

        Returns:
            MatchRunResult with pairs sorted ascending by combined score.

        Raises:
            EventPhaseError: If the event exists but is not in a phase that
                allows matching.
        """
        async with self.store.event_lock(event_id):
            logger.info("match_run_start", event_id=event_id)
            await self._check_phase(event_id)

            loaded = await self.load_votes(event_id)
            candidates = find_mutual_likes(loaded.votes)
            accepted = resolve_conflicts(candidates)
            logger.info(
                "pairs_resolved",
                event_id=event_id,
                votes=len(loaded),
                candidates=len(candidates),
                accepted=len(accepted),
            )

            result = MatchRunResult(
                event_id=event_id, pairs=accepted, skipped_votes=loaded.skipped
            )
            await self._persist(result)

            logger.info(
                "match_run_complete",
                event_id=event_id,
                created=len(result.created),
                existing=len(result.existing),
                failed=len(result.failures),
                skipped_votes=result.skipped_votes,
            )
            return result

    async def load_votes(self, event_id: str) -> LoadedVotes:
        """Load the liked, finalized votes of an event."""
        rows = await self.store.votes.load_qualifying_votes(event_id)
        return shape_votes(rows)

    async def _check_phase(self, event_id: str) -> None:
        allowed = list(self.config.matching.required_phases)
        if not allowed:
            return
        event = await self.store.events.get_event(event_id)
        if event is None:
            return
        if event.phase not in allowed:
            raise EventPhaseError(event_id, event.phase, allowed)

    async def _persist(self, result: MatchRunResult) -> None:
        """Write one match per accepted pair, collecting failures."""
        status = self.config.matching.match_status
        for pair in result.pairs:
            try:
                match, created = await self.store.matches.upsert_pair(
                    result.event_id, pair.artwork1_id, pair.artwork2_id, status
                )
            except (MatchConflictError, SQLAlchemyError) as e:
                logger.warning(
                    "match_persist_failed",
                    event_id=result.event_id,
                    artwork1_id=pair.artwork1_id,
                    artwork2_id=pair.artwork2_id,
                    error=str(e),
                )
                result.failures.append(PersistFailure(pair=pair, error=str(e)))
                continue

            if created:
                result.created.append(pair)
                if self.config.matching.notify_artists:
                    result.notified += await self._notify(pair, match)
            else:
                result.existing.append(pair)

    async def _notify(self, pair: CandidatePair, match: Match) -> int:
        """Notify both artists of a new match; returns notifications written."""
        notifications = [
            Notification(
                artist_id=pair.owner1_id,
                type="MATCH",
                message=(
                    f"You have a new art match: your artwork {pair.artwork1_id} "
                    f"swaps with {pair.artwork2_id}."
                ),
            ),
            Notification(
                artist_id=pair.owner2_id,
                type="MATCH",
                message=(
                    f"You have a new art match: your artwork {pair.artwork2_id} "
                    f"swaps with {pair.artwork1_id}."
                ),
            ),
        ]
        try:
            await self.store.notifications.add_notifications(notifications)
        except SQLAlchemyError as e:
            logger.warning("match_notify_failed", match_id=match.id, error=str(e))
            return 0
        return len(notifications)


async def calculate_matches(
    store: SwapStore, event_id: str, config: MatcherConfig | None = None
) -> MatchRunResult:
    """Run one matching pass for an event with a throwaway service."""
    service = MatchService(config or store.config, store)
    return await service.calculate_matches(event_id)
