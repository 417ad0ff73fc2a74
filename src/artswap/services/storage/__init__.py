from .event_repository import EventRepository
from .fixtures import SwapFixture, load_fixture
from .match_repository import MatchRepository
from .notification_repository import NotificationRepository
from .store import SwapStore
from .vote_repository import VoteRepository

__all__ = [
    "EventRepository",
    "MatchRepository",
    "NotificationRepository",
    "SwapFixture",
    "SwapStore",
    "VoteRepository",
    "load_fixture",
]
