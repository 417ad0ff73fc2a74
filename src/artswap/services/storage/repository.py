"""Async base for repositories running blocking SQLModel sessions."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Generic, TypeVar

from sqlmodel import Session, SQLModel

if TYPE_CHECKING:
    from sqlalchemy import Engine

T = TypeVar("T")


class AsyncRepository(Generic[T]):
    """Run session work on a worker thread, one Session per call.

    A call that fails rolls back only its own session, so work committed by
    earlier calls is kept.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def _run_session(self, fn: Callable[[Session], T]) -> T:
        def _run() -> T:
            with Session(self._engine) as session:
                return fn(session)

        return await asyncio.to_thread(_run)

    async def commit_all(self, records: Sequence[SQLModel]) -> None:
        """Insert records in a single transaction."""

        def _save(session: Session) -> None:
            session.add_all(records)
            session.commit()

        await self._run_session(_save)
