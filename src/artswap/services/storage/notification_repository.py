"""Database persistence for artist notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import Session, col, select

from artswap.models import Notification

from .repository import AsyncRepository

if TYPE_CHECKING:
    from sqlalchemy import Engine


class NotificationRepository(AsyncRepository):
    """Persist and query notifications."""

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def add_notifications(self, notifications: list[Notification]) -> None:
        """Save several notifications in one transaction."""
        await self.commit_all(notifications)

    async def list_for_artist(self, artist_id: str) -> list[Notification]:
        """Get an artist's notifications, newest first."""

        def _get(session: Session) -> list[Notification]:
            statement = (
                select(Notification)
                .where(Notification.artist_id == artist_id)
                .order_by(col(Notification.created_at).desc())
            )
            return list(session.exec(statement).all())

        return await self._run_session(_get)
