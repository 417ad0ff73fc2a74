"""Database persistence for events."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import Session

from artswap.core.errors import EventNotFoundError
from artswap.models import Event

from .repository import AsyncRepository

if TYPE_CHECKING:
    from sqlalchemy import Engine


class EventRepository(AsyncRepository):
    """Persist and query events."""

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def get_event(self, event_id: str) -> Event | None:
        """Get an event by id, None if unknown."""

        def _get(session: Session) -> Event | None:
            return session.get(Event, event_id)

        return await self._run_session(_get)

    async def update_phase(self, event_id: str, phase: str) -> Event:
        """Set an event's phase."""

        def _update(session: Session) -> Event:
            event = session.get(Event, event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            event.phase = phase
            session.add(event)
            session.commit()
            session.refresh(event)
            return event

        return await self._run_session(_update)
