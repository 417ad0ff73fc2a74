"""Database reads for event votes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import Session, col, select

from artswap.models import Artist, Artwork, Vote

from .repository import AsyncRepository

if TYPE_CHECKING:
    from sqlalchemy import Engine

VoteRow = tuple[Vote, Artwork | None, Artist | None]


class VoteRepository(AsyncRepository):
    """Query votes cast within an event."""

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def load_qualifying_votes(self, event_id: str) -> list[VoteRow]:
        """Load liked, finalized votes with their artwork and casting artist.

        Artwork and artist are outer-joined so a dangling reference comes back
        as None instead of silently dropping the vote.
        """

        def _get(session: Session) -> list[VoteRow]:
            statement = (
                select(Vote, Artwork, Artist)
                .join(Artwork, col(Vote.artwork_id) == col(Artwork.id), isouter=True)
                .join(Artist, col(Vote.artist_id) == col(Artist.id), isouter=True)
                .where(
                    Vote.event_id == event_id,
                    col(Vote.liked).is_(True),
                    col(Vote.finalized_at).is_not(None),
                )
                .order_by(col(Vote.created_at), col(Vote.id))
            )
            return [tuple(row) for row in session.exec(statement).all()]

        return await self._run_session(_get)
