"""Event phase lifecycle and the close-voting handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

import structlog

from artswap.core.config import MatcherConfig
from artswap.core.errors import EventNotFoundError, InvalidPhaseTransitionError
from artswap.models import Event
from artswap.services.matching import MatchService
from artswap.services.storage import SwapStore

logger = structlog.get_logger()


class EventPhase(StrEnum):
    OPEN = "open"
    VOTING = "voting"
    CLOSED = "closed"
    ARCHIVED = "archived"


PHASE_ORDER: tuple[EventPhase, ...] = (
    EventPhase.OPEN,
    EventPhase.VOTING,
    EventPhase.CLOSED,
    EventPhase.ARCHIVED,
)


def can_transition(from_phase: str, to_phase: str) -> bool:
    """Only single forward steps are allowed (open -> voting -> closed -> archived)."""
    try:
        src = PHASE_ORDER.index(EventPhase(from_phase))
        dst = PHASE_ORDER.index(EventPhase(to_phase))
    except ValueError:
        return False
    return dst == src + 1


@dataclass
class CloseSummary:
    """What the close-voting handler reports back to the caller."""

    event_id: str
    matches_created: int = 0
    matches_existing: int = 0
    skipped_votes: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def total_matches(self) -> int:
        return self.matches_created + self.matches_existing


class EventService:
    """Moves events through their phases and triggers matching on close."""

    def __init__(
        self,
        config: MatcherConfig,
        store: SwapStore,
        match_service: MatchService | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self.match_service = match_service or MatchService(config, store)

    async def transition(self, event_id: str, to_phase: str) -> Event:
        """Validate and persist a phase change.

        Raises:
            EventNotFoundError: If the event doesn't exist.
            InvalidPhaseTransitionError: If the change is not a single forward step.
        """
        event = await self.store.events.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        if not can_transition(event.phase, to_phase):
            raise InvalidPhaseTransitionError(event_id, event.phase, to_phase)

        updated = await self.store.events.update_phase(event_id, str(to_phase))
        logger.info(
            "event_phase_changed",
            event_id=event_id,
            from_phase=event.phase,
            to_phase=str(to_phase),
        )
        return updated

    async def close_event(self, event_id: str) -> CloseSummary:
        """Close voting and calculate the event's matches.

        Match persistence failures are reported as warnings in the summary;
        the phase change is kept regardless.
        """
        await self.transition(event_id, EventPhase.CLOSED)
        result = await self.match_service.calculate_matches(event_id)

        summary = CloseSummary(
            event_id=event_id,
            matches_created=len(result.created),
            matches_existing=len(result.existing),
            skipped_votes=result.skipped_votes,
        )
        for failure in result.failures:
            summary.warnings.append(
                f"{failure.pair.artwork1_id} <-> {failure.pair.artwork2_id}: {failure.error}"
            )
        if result.skipped_votes:
            summary.warnings.append(
                f"{result.skipped_votes} vote(s) skipped for missing artwork or artist"
            )
        if summary.warnings:
            logger.warning(
                "event_close_partial", event_id=event_id, warnings=len(summary.warnings)
            )
        return summary
