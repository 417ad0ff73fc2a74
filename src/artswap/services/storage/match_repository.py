"""Database persistence for match records."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import Session, col, or_, select

from artswap.core.errors import MatchConflictError
from artswap.models import Match, pair_key

from .repository import AsyncRepository

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = structlog.get_logger()


class MatchRepository(AsyncRepository):
    """Persist and query match records."""

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def upsert_pair(
        self,
        event_id: str,
        artwork1_id: str,
        artwork2_id: str,
        status: str = "completed",
    ) -> tuple[Match, bool]:
        """Create the match for an artwork pair unless it already exists.

        The record is keyed by the order-independent pair identity, so an
        existing match for the same two artworks is left unchanged. Losing an
        insert race on that key also reports the existing record.

        Args:
            event_id: Event the match belongs to.
            artwork1_id: First artwork of the pair.
            artwork2_id: Second artwork of the pair.
            status: Status for a newly created record.

        Returns:
            Tuple of (match, created).

        Raises:
            MatchConflictError: If either artwork already belongs to a
                different match in the event.
        """
        key = pair_key(event_id, artwork1_id, artwork2_id)
        artwork_ids = [artwork1_id, artwork2_id]

        def _upsert(session: Session) -> tuple[Match, bool]:
            existing = session.exec(select(Match).where(Match.pair_key == key)).first()
            if existing:
                return existing, False

            conflict = session.exec(
                select(Match).where(
                    Match.event_id == event_id,
                    or_(
                        col(Match.artwork1_id).in_(artwork_ids),
                        col(Match.artwork2_id).in_(artwork_ids),
                    ),
                )
            ).first()
            if conflict:
                taken = next(
                    a for a in artwork_ids if a in (conflict.artwork1_id, conflict.artwork2_id)
                )
                raise MatchConflictError(event_id, taken, conflict.id)

            match = Match(
                event_id=event_id,
                artwork1_id=artwork1_id,
                artwork2_id=artwork2_id,
                pair_key=key,
                status=status,
            )
            session.add(match)
            try:
                session.commit()
            except (IntegrityError, OperationalError):
                # Another writer inserted the same pair first.
                session.rollback()
                winner = session.exec(select(Match).where(Match.pair_key == key)).first()
                if winner is None:
                    raise
                return winner, False
            session.refresh(match)
            return match, True

        match, created = await self._run_session(_upsert)
        logger.debug("match_upserted", match_id=match.id, created=created)
        return match, created

    async def list_matches(self, event_id: str) -> list[Match]:
        """Get all matches of an event, oldest first."""

        def _get(session: Session) -> list[Match]:
            statement = (
                select(Match)
                .where(Match.event_id == event_id)
                .order_by(col(Match.created_at), col(Match.id))
            )
            return list(session.exec(statement).all())

        return await self._run_session(_get)

    async def get_matches_for_artwork(self, event_id: str, artwork_id: str) -> list[Match]:
        """Get all matches of an event involving an artwork."""

        def _get(session: Session) -> list[Match]:
            statement = select(Match).where(
                Match.event_id == event_id,
                (Match.artwork1_id == artwork_id) | (Match.artwork2_id == artwork_id),
            )
            return list(session.exec(statement).all())

        return await self._run_session(_get)
