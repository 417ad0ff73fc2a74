"""Unified swap storage layer over a SQLModel engine."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, create_engine

from artswap.core.config import MatcherConfig

from .event_repository import EventRepository
from .match_repository import MatchRepository
from .notification_repository import NotificationRepository
from .repository import AsyncRepository
from .vote_repository import VoteRepository

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = structlog.get_logger()


class SwapStore:
    """Persistence layer for swap events.

    Owns the database engine and exposes one repository per record type:
    votes (read), matches (upsert), events (phase), notifications (write).
    """

    def __init__(self, config: MatcherConfig, engine: Engine | None = None) -> None:
        """Initialize swap store.

        Args:
            config: Matcher configuration.
            engine: Optional pre-built engine; created from config if None.
        """
        self.config = config
        self._engine = engine or self._create_engine()
        SQLModel.metadata.create_all(self._engine)

        self.votes = VoteRepository(self._engine)
        self.matches = MatchRepository(self._engine)
        self.events = EventRepository(self._engine)
        self.notifications = NotificationRepository(self._engine)
        self._records = AsyncRepository(self._engine)
        self._event_locks: dict[str, asyncio.Lock] = {}
        self._event_lock_users: dict[str, int] = {}

    def _create_engine(self) -> Engine:
        db_url = self.config.get_database_url()
        logger.info("store_init", url=db_url.split("://", 1)[0])
        # Use NullPool to avoid connection pooling issues on Windows
        return create_engine(db_url, poolclass=NullPool, echo=self.config.database.echo)

    @asynccontextmanager
    async def event_lock(self, event_id: str) -> AsyncIterator[None]:
        """Hold the in-process lock of an event.

        Work on one event through this store runs one holder at a time. The
        lock entry is dropped once nobody holds or waits for it.
        """
        lock = self._event_locks.setdefault(event_id, asyncio.Lock())
        self._event_lock_users[event_id] = self._event_lock_users.get(event_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._event_lock_users[event_id] -= 1
            if not self._event_lock_users[event_id]:
                del self._event_lock_users[event_id]
                del self._event_locks[event_id]

    async def add_all(self, records: list[SQLModel]) -> None:
        """Insert records in one transaction (seeding and tests)."""
        await self._records.commit_all(records)

    async def close(self) -> None:
        """Dispose of the database engine."""
        if self._engine is not None:
            self._engine.dispose()
